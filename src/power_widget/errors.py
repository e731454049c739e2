"""Exceptions raised by the power widget."""


class PowerWidgetError(Exception):
    """Base class for power widget errors."""


class WidgetStateError(PowerWidgetError):
    """An operation was called in a controller state that does not allow it."""


class SubscriptionError(PowerWidgetError):
    """The host refused or failed an event subscription."""
