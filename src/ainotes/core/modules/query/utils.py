from ainotes.core.modules.note.models import Note


def note_matches(note: Note, query: str) -> bool:
    """Case-insensitive substring match over title, content and tags.

    A blank query matches every note.
    """
    if not query.strip():
        return True
    needle = query.lower()
    return (
        needle in note.title.lower()
        or needle in note.content.lower()
        or any(needle in tag.lower() for tag in note.tags)
    )


def distinct_tags(notes: list[Note]) -> list[str]:
    """Tags across notes, first occurrence wins."""
    seen: dict[str, None] = {}
    for note in notes:
        for tag in note.tags:
            seen.setdefault(tag, None)
    return list(seen)
