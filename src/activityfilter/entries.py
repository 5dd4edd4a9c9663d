"""
Feed entry model.

An Entry is the unit of classification: one activity item delivered by the
feed, reduced to the flags and text the condition engine consumes.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from activityfilter.core.exceptions import ErrorCode, ErrorContext, ValidationError

logger = logging.getLogger(__name__)

TEXT_ACTIVITY_TYPES = {"text", "message"}
TRUE_VALUES = {"true", "1", "yes", "on", "enabled"}
FALSE_VALUES = {"false", "0", "no", "off", "disabled", ""}


def _parse_flag(key: str, value: Any) -> bool:
    """Parse an explicit entry flag, rejecting values that are not clearly boolean."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise ValidationError(
        f"Entry flag '{key}' must be a boolean, got {value!r}",
        error_code=ErrorCode.VALIDATION_TYPE_MISMATCH,
        field_name=key,
        field_value=value,
    )


@dataclass(frozen=True)
class Entry:
    """
    Container for one feed entry.

    Attributes:
        id: Identifier of the entry (informational only)
        has_comments: Whether the entry has at least one reply
        has_likes: Whether the entry has at least one like
        has_image: Whether the entry carries an image
        has_video: Whether the entry carries a video
        is_text_only: Whether the entry is a text/message activity
        text: Full visible text used for string matching
    """
    id: str = ""
    has_comments: bool = False
    has_likes: bool = False
    has_image: bool = False
    has_video: bool = False
    is_text_only: bool = False
    text: str = ""

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> 'Entry':
        """
        Create an Entry from raw feed data.

        Accepts snake_case or camelCase keys. Missing flags are derived from
        counts (comment_count, like_count) and activity_type when present,
        otherwise they default to False. Explicit flags accept booleans, 0/1
        and the usual true/false strings ("false", "no", "off", ...).

        Args:
            raw: Raw entry mapping

        Returns:
            Entry instance

        Raises:
            ValidationError: If raw is not a mapping or a flag is not boolean
        """
        if not isinstance(raw, Mapping):
            raise ValidationError(
                f"Entry must be a mapping, got {type(raw).__name__}",
                error_code=ErrorCode.VALIDATION_TYPE_MISMATCH,
                field_name="entry",
                field_value=raw,
            )

        def pick_item(*keys: str):
            for key in keys:
                if key in raw and raw[key] is not None:
                    return key, raw[key]
            return None, None

        def pick(*keys: str) -> Any:
            return pick_item(*keys)[1]

        def flag(keys, count_keys=()) -> bool:
            key, value = pick_item(*keys)
            if value is not None:
                return _parse_flag(key, value)
            count = pick(*count_keys) if count_keys else None
            try:
                return int(count or 0) > 0
            except (TypeError, ValueError):
                logger.debug(f"Ignoring non-numeric count {count!r} in entry {raw.get('id', 'unknown')}")
                return False

        text_key, is_text_only = pick_item('is_text_only', 'isTextOnly')
        if is_text_only is None:
            activity_type = str(pick('activity_type', 'activityType') or '').lower()
            is_text_only = activity_type in TEXT_ACTIVITY_TYPES
        else:
            is_text_only = _parse_flag(text_key, is_text_only)

        return cls(
            id=str(pick('id') or ''),
            has_comments=flag(('has_comments', 'hasComments'), ('comment_count', 'commentCount')),
            has_likes=flag(('has_likes', 'hasLikes'), ('like_count', 'likeCount')),
            has_image=flag(('has_image', 'hasImage')),
            has_video=flag(('has_video', 'hasVideo')),
            is_text_only=is_text_only,
            text=str(pick('text') or ''),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary for serialization."""
        return asdict(self)


def load_entries(path: Union[str, Path]) -> List[Entry]:
    """
    Load entries from a JSON array file or a JSON-lines file.

    Args:
        path: Path to the entries file

    Returns:
        Entries in file order

    Raises:
        ValidationError: If the file cannot be read or parsed
    """
    path = Path(path)
    context = ErrorContext(operation="load_entries", file_path=str(path))

    try:
        content = path.read_text(encoding='utf-8')
    except OSError as e:
        raise ValidationError(f"Cannot read entries file {path}: {e}", cause=e, context=context)

    stripped = content.strip()
    if not stripped:
        return []

    records: Optional[List[Any]] = None
    if stripped.startswith('['):
        try:
            records = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Invalid JSON in {path}: {e}",
                error_code=ErrorCode.VALIDATION_FORMAT_ERROR,
                cause=e,
                context=context,
            )
    else:
        records = []
        for line_number, line in enumerate(stripped.splitlines(), 1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ValidationError(
                    f"Invalid JSON on line {line_number} of {path}: {e}",
                    error_code=ErrorCode.VALIDATION_FORMAT_ERROR,
                    cause=e,
                    context=context,
                )

    logger.debug(f"Loaded {len(records)} raw entries from {path}")
    return [Entry.from_raw(record) for record in records]
