from core import DisplayNote

TRIMMED_NOTICE = "Displayed note trimmed for quick viewing."


def format_note_count(count: int) -> str:
    return f"{count} note{'' if count == 1 else 's'}"


def retry_label(has_active_directory: bool) -> str:
    return "Try Again" if has_active_directory else "Choose Folder"


def render_note(note: DisplayNote, note_count: int = 0) -> str:
    """
    Formats a note as plain text, shared by the menu bar app and the command line.
    Args:
        note (DisplayNote): The note to show.
        note_count (int): The number of notes in the folder. Zero leaves the count out.
    Returns:
        str: The note body followed by the trimmed notice and note count, where they apply.
    """
    parts = [note.text]
    if note.is_truncated:
        parts.append(TRIMMED_NOTICE)
    if note_count > 0:
        parts.append(f"{format_note_count(note_count)} in this folder.")
    return "\n\n".join(parts)


def display_note(note: DisplayNote, note_count: int = 0):
    """
    Prints a note to the terminal.
    Args:
        note (DisplayNote): The note to show.
        note_count (int): The number of notes in the folder.
    """
    print(f"\n📝 {note.title}")
    print("─" * 40)
    print(render_note(note, note_count))
    print("─" * 40)
