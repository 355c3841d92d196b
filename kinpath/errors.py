"""Errors raised while resolving relationships.

Input errors are the caller's fault and are not retried. Invariant violations
mean the recorded data (or the resolver) is inconsistent; they are never turned
into a plausible-looking answer.
"""


class ResolverError(Exception):
    """Base class for relationship resolver errors."""


class InputError(ResolverError):
    """The request refers to something that is not in scope."""


class UnknownPersonError(InputError):
    def __init__(self, person_id: str, tree_id: str | None = None) -> None:
        self.person_id = person_id
        self.tree_id = tree_id
        scope = f"tree {tree_id}" if tree_id else "the merged scope"
        super().__init__(f"Person {person_id} not found in {scope}")


class EmptyScopeError(InputError):
    def __init__(self, tree_id: str | None = None) -> None:
        self.tree_id = tree_id
        scope = f"Tree {tree_id}" if tree_id else "The merged scope"
        super().__init__(f"{scope} has no persons")


class InvariantViolationError(ResolverError):
    """Recorded relationships break an invariant the resolver depends on."""


class LineageCycleError(InvariantViolationError):
    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Parent-child cycle detected: {' -> '.join(cycle)}")


class AmbiguousPivotError(InvariantViolationError):
    def __init__(self, candidates: list[str]) -> None:
        self.candidates = candidates
        super().__init__(
            f"Common ancestors disagree on generation distances: {', '.join(candidates)}"
        )


class MalformedPathError(InvariantViolationError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed relationship path: {reason}")
