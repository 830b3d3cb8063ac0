from abc import ABC, abstractmethod


class EmailDeliveryError(Exception):
    """The email provider rejected or never received a message."""


class IEmailSender(ABC):
    """Outbound email - application layer"""

    @abstractmethod
    async def send_login_code(self, email: str, code: str) -> None:
        """
        Deliver a one-time login code.

        Raises:
            EmailDeliveryError: message could not be handed to the provider
        """
        pass
