from typing import Literal

ViewState = Literal["idle", "loading", "loaded", "errored"]

ALLOWED_TRANSITIONS: dict[ViewState, frozenset[ViewState]] = {
    "idle": frozenset(["loading"]),
    "loading": frozenset(["loaded", "errored"]),
    # Refetch (next page, retry after error)
    "loaded": frozenset(["loading"]),
    "errored": frozenset(["loading"]),
}


class InvalidViewTransitionError(ValueError):
    def __init__(self, current: ViewState, new: ViewState) -> None:
        super().__init__(f"Invalid transition from {current} to {new}")
        self.current = current
        self.new = new


def can_transition(current: ViewState, new: ViewState) -> bool:
    """
    Determine if a view state transition is allowed.
    """
    if current == new:
        return True
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


def transition(current: ViewState, new: ViewState) -> ViewState:
    """
    Return the new state.
    Raises InvalidViewTransitionError if the transition is not allowed.
    """
    if not can_transition(current, new):
        raise InvalidViewTransitionError(current, new)
    return new
