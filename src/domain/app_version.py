"""
Client app version tags.

Mobile clients append a tag such as ``ios 1.2.3+4`` to every contact form
submission. The tag is one platform literal, a single space, and a
``major.minor.patch+build`` version made of ASCII digits.
"""

import re
from dataclasses import dataclass

from .errors import InvalidAppVersionError

PLATFORMS = ('ios', 'android')

# ASCII digits only
APP_VERSION_PATTERN = re.compile(
    r'(?P<platform>ios|android) '
    r'(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)\+(?P<build>[0-9]+)'
)


@dataclass(frozen=True)
class AppVersion:
    """
    Parsed client tag.

    Attributes:
        platform: "ios" or "android"
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        build: Build number
    """
    platform: str
    major: int
    minor: int
    patch: int
    build: int

    @property
    def version(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}+{self.build}"

    def __str__(self) -> str:
        return f"{self.platform} {self.version}"


def parse_app_version(value: str) -> AppVersion:
    """
    Parse a client tag into an AppVersion.

    The whole string must match; leading zeros are accepted.

    Args:
        value: Raw tag, e.g. "android 2.0.0+10"

    Returns:
        AppVersion: The parsed tag

    Raises:
        InvalidAppVersionError: If the value does not match the grammar
    """
    match = APP_VERSION_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidAppVersionError(f"{value} app version is not correct")

    return AppVersion(
        platform=match.group('platform'),
        major=int(match.group('major')),
        minor=int(match.group('minor')),
        patch=int(match.group('patch')),
        build=int(match.group('build')),
    )
