"""Credential holder for the Dropbox API."""
from dataclasses import dataclass, field

from .exceptions import ArgumentError


@dataclass(frozen=True)
class DropboxApp:
    """An initialized Dropbox application: one bearer token, never refreshed here.

    Token refresh is outside this package; create a new DropboxApp (and a new
    client) with the refreshed token instead.
    """
    access_token: str = field(repr=False)

    def __post_init__(self):
        if not self.access_token or not isinstance(self.access_token, str):
            raise ArgumentError("DropboxApp requires a non-empty access token")

    @property
    def authorization(self) -> str:
        return f"Bearer {self.access_token}"


class Dropbox:
    """Entry point mirroring ``Dropbox.initialize_app(token)``.

    Example:
        app = Dropbox.initialize_app(token)
        async with DropboxFile.from_app(app) as files:
            result = await files.list_folder("/Documents")
    """

    def __init__(self):
        raise TypeError("Dropbox is not instantiable; use Dropbox.initialize_app()")

    @staticmethod
    def initialize_app(access_token: str) -> DropboxApp:
        return DropboxApp(access_token)
