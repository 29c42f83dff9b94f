from typing import Protocol


class Mailer(Protocol):
    def send_email(self, to: str, subject: str, body: str) -> None:
        ...
