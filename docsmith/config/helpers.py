"""Field parsers shared by the build configuration loader.

Each helper appends a message to ``errors`` instead of raising, so the loader
can report every problem in the file at once.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

from docsmith.sitemap import PageGranularity
from docsmith.theme import DocConvention, FileGlobFilter

from .models import AssetTransfer


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(base_dir: Path, value: object, key: str, errors: list[str]) -> Path | None:
    """Resolve ``value`` against ``base_dir``; record non-text values."""
    text = _optional_str(value)
    if text is None:
        return None
    if not isinstance(value, str):
        errors.append(f"{key}: a path string was expected.")
        return None
    return (base_dir / text).resolve()


def _parse_base_url(value: object, errors: list[str]) -> str:
    """Return the base URL, which must be absolute when supplied."""
    text = _optional_str(value)
    if text is None:
        return ""
    parts = urlsplit(text)
    if not (parts.scheme and parts.netloc):
        errors.append("base_url: the base URL must be an absolute URI.")
        return ""
    return text if text.endswith("/") else f"{text}/"


def _parse_convention(value: object, errors: list[str]) -> DocConvention:
    text = _optional_str(value)
    if text is None:
        return DocConvention.DOTNET
    try:
        return DocConvention(text.lower())
    except ValueError:
        allowed = ", ".join(member.value for member in DocConvention)
        errors.append(f"convention: expected one of {allowed}, got {text!r}.")
        return DocConvention.DOTNET


def _parse_granularity(value: object, errors: list[str]) -> PageGranularity:
    match value:
        case None:
            return PageGranularity.NAMESPACE_TYPE_MEMBER
        case str() as text:
            names = text
        case list() as items:
            names = ",".join(str(item) for item in items)
        case _:
            errors.append("granularity: a string or list of page kinds was expected.")
            return PageGranularity.NAMESPACE_TYPE_MEMBER
    try:
        return PageGranularity.parse(names)
    except ValueError as exc:
        errors.append(f"granularity: {exc}")
        return PageGranularity.NAMESPACE_TYPE_MEMBER


def _parse_settings(value: object, errors: list[str]) -> dict[str, object]:
    match value:
        case None:
            return {}
        case dict() as mapping:
            return {str(key): item for key, item in mapping.items()}
        case _:
            errors.append("theme_settings: a mapping was expected.")
            return {}


def _parse_asset_transfer(
    entry: object, key: str, errors: list[str]
) -> AssetTransfer | None:
    if not isinstance(entry, dict):
        errors.append(f"{key}: a mapping with 'source' and 'target_path' was expected.")
        return None
    source = entry.get("source")
    if isinstance(source, str):
        source = [source]
    if (
        not isinstance(source, list)
        or not source
        or not all(isinstance(pattern, str) for pattern in source)
    ):
        errors.append(f"{key}.source: a list of glob patterns was expected.")
        return None
    target = PurePosixPath((_optional_str(entry.get("target_path")) or "").replace("\\", "/"))
    if target.is_absolute() or ".." in target.parts:
        errors.append(f"{key}.target_path: a folder inside the output directory was expected.")
        return None
    return AssetTransfer(FileGlobFilter(source), target.as_posix())


def _parse_assets(value: object, errors: list[str]) -> list[AssetTransfer]:
    match value:
        case None:
            return []
        case list() as entries:
            transfers = [
                _parse_asset_transfer(entry, f"assets[{index}]", errors)
                for index, entry in enumerate(entries)
            ]
            return [transfer for transfer in transfers if transfer is not None]
        case _:
            errors.append("assets: a list of asset copies was expected.")
            return []


__all__ = [
    "_optional_str",
    "_parse_assets",
    "_parse_base_url",
    "_parse_convention",
    "_parse_granularity",
    "_parse_settings",
    "_resolve_path",
]
