class TransducibleError(Exception):
    pass


class ContractViolation(TransducibleError):
    """
    A reducing function was driven outside of its call discipline:
    step after complete, or complete more than once.
    """
    pass


class ClosedChannelError(TransducibleError):
    """Raised by put on a channel which is closed, or closes while we wait."""
    pass
