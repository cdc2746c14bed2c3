from abc import ABC, abstractmethod


class NotificationPort(ABC):
    @abstractmethod
    def send_message(self, text: str) -> bool:
        raise NotImplementedError
