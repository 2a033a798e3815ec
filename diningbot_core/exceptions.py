"""
Dining bot exceptions
"""


class DiningBotError(Exception):
    """Base exception for the dining bot"""
    pass


class ConfigError(DiningBotError):
    """Missing or invalid configuration"""
    pass


class MalformedPayload(DiningBotError):
    """Intercepted menu payload could not be parsed"""
    pass


class NavigationFailed(DiningBotError):
    """A required UI element was missing at a navigation step"""

    def __init__(self, step: str, detail: str = ""):
        self.step = step
        self.detail = detail
        message = f"Navigation failed at step '{step}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DeliveryFailed(DiningBotError):
    """Outbound message could not be delivered"""
    pass


class InterceptionTimeout(DiningBotError):
    """The menu request was never intercepted within the allotted time"""
    pass
