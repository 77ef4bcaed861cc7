class ModifierError(Exception):
    """Base class for errors raised while queueing modifications"""


class NodeNotFoundError(ModifierError):
    """A function, binding, JSX element or export could not be located"""

    def __init__(self, kind: str, target: str):
        self.kind = kind
        self.target = target
        super().__init__(f"Could not find {kind}: {target}")


class ModificationConflictError(ModifierError):
    """Two queued modifications overlap"""


class InvalidOperationError(ModifierError):
    """A spec cannot be applied to the node it targets"""
