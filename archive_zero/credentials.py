from typing import Awaitable, Callable, Tuple

from rich.console import Console

CredentialPrompt = Callable[[], Awaitable[Tuple[str, str]]]


def console_credentials(console: Console) -> CredentialPrompt:
    """Blocking prompt on the console; holds the event loop until answered."""

    async def _prompt() -> Tuple[str, str]:
        user = console.input("Username: ")
        password = console.input("Password: ", password=True)
        return user, password

    return _prompt


def fixed_credentials(user: str, password: str) -> CredentialPrompt:
    async def _prompt() -> Tuple[str, str]:
        return user, password

    return _prompt
