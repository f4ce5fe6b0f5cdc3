from ainotes.errors import ValidationError

MAX_TITLE_LENGTH = 200
MAX_TAG_LENGTH = 50


def validate_title(title: str) -> str:
    """Validate a note title and return it without surrounding whitespace.

    Raises:
        ValidationError: If the title is empty or longer than MAX_TITLE_LENGTH
    """
    title = title.strip()
    if not title:
        raise ValidationError("Title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters long")
    return title


def validate_content(content: str) -> str:
    """Validate note content. Content is kept as written, but must not be blank."""
    if not content.strip():
        raise ValidationError("Content is required")
    return content


def validate_tags(tags: list[str]) -> list[str]:
    """Trim tags and reject empty or oversized ones. Order and duplicates are kept."""
    result = []
    for raw_tag in tags:
        tag = raw_tag.strip()
        if not tag:
            raise ValidationError("Tags cannot be empty")
        if len(tag) > MAX_TAG_LENGTH:
            raise ValidationError(f"Tag '{tag[:20]}...' is longer than {MAX_TAG_LENGTH} characters")
        result.append(tag)
    return result
