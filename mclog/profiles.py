"""Known Minecraft clients: default log locations and the markers they write."""

from enum import Enum
from pathlib import Path
from typing import Annotated, Dict, Optional

from pydantic import BaseModel, Field


class Profile(str, Enum):
    """Client that produced the log."""

    VANILLA = "vanilla"
    BADLION = "badlion"
    LUNAR = "lunar"
    CUSTOM = "custom"


class InvalidProfileError(ValueError):
    """Raised for a profile name that is not in the profile table."""


class ClientMarkers(BaseModel):
    """
    Substrings identifying session changes in a client's log.

    Markers set to None are not written by that client.
    """

    setting_user: Annotated[
        str,
        Field(
            description="Marker preceding the username on login",
            default="[Client thread/INFO]: Setting user: ",
        ),
    ]

    switched_account: Annotated[
        Optional[str],
        Field(description="Marker preceding the username on account switch"),
    ] = None

    connecting: Annotated[
        str,
        Field(
            description="Marker preceding 'host, port' when joining a server",
            default="[Client thread/INFO]: Connecting to ",
        ),
    ]

    connection_closed: Annotated[
        Optional[str],
        Field(description="Marker written when leaving a server"),
    ] = None

    stopping: Annotated[
        str,
        Field(
            description="Marker written when the client shuts down",
            default="[Client thread/INFO]: Stopping!",
        ),
    ]


_MARKERS: Dict[Profile, ClientMarkers] = {
    Profile.VANILLA: ClientMarkers(),
    Profile.BADLION: ClientMarkers(
        switched_account="[Client thread/INFO]: Switched to account: ",
        connection_closed="[Client thread/INFO]: Update connection state: '{\"state\":1}'",
    ),
    Profile.LUNAR: ClientMarkers(
        setting_user="[Client thread/INFO]: [LC] Setting user: ",
    ),
    Profile.CUSTOM: ClientMarkers(),
}

# Relative to the user's home directory
_DEFAULT_PATHS: Dict[Profile, tuple[str, ...]] = {
    Profile.VANILLA: ("AppData", "Roaming", ".minecraft", "logs", "latest.log"),
    Profile.BADLION: (
        "AppData",
        "Roaming",
        ".minecraft",
        "logs",
        "blclient",
        "minecraft",
        "latest.log",
    ),
    Profile.LUNAR: (".lunarclient", "offline", "multiver", "logs", "latest.log"),
}

HOME_PLACEHOLDER = "HOME"


def parse_profile(name: Profile | str) -> Profile:
    """Resolve a case-insensitive client name to a profile with a default path.

    Raises:
        InvalidProfileError: If the name is not a known client
    """
    if isinstance(name, Profile):
        profile = name
    else:
        try:
            profile = Profile(str(name).lower())
        except ValueError:
            profile = None

    if profile is None or profile not in _DEFAULT_PATHS:
        raise InvalidProfileError(
            f"Invalid client '{name}'. For unsupported clients, set the log path directly."
        )
    return profile


def default_path(profile: Profile) -> Path:
    return Path.home().joinpath(*_DEFAULT_PATHS[profile])


def markers_for(profile: Profile) -> ClientMarkers:
    return _MARKERS[profile]


def expand_home(path: str) -> str:
    """Replace every HOME token with the user's home directory."""
    return path.replace(HOME_PLACEHOLDER, str(Path.home()))
