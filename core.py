import os
import queue
import random
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional

import config


class NoteError(Exception):
    """
    Base class for every expected failure while fetching a note.
    The string form is a short message meant to be shown to the user.
    """


class NoTextFilesError(NoteError):
    def __init__(self, text_extensions: Optional[List[str]] = None):
        extensions = "/".join(text_extensions or config.TEXT_EXTENSIONS)
        super().__init__(f"No {extensions} files found in that folder.")


class UnreadableFileError(NoteError):
    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"Could not read {file_name}. Ensure it is UTF-8 encoded.")


class GenericNoteError(NoteError):
    pass


class NotAFolderError(NoteError):
    def __init__(self):
        super().__init__("Please pick a folder, not a file.")


@dataclass(frozen=True)
class DisplayNote:
    """
    A note prepared for display. Recreated on every fetch.
    """
    title: str
    text: str
    is_truncated: bool

    @classmethod
    def make(cls, path: str, raw_text: str, max_lines: int = config.MAX_LINES,
             max_characters: int = config.MAX_CHARACTERS) -> 'DisplayNote':
        """
        Builds a display note from the raw contents of a file.
        Args:
            path (str): The path of the note file. Its name without extension becomes the title.
            raw_text (str): The decoded file contents.
            max_lines (int): The maximum number of lines to keep.
            max_characters (int): The maximum number of characters to keep after the line limit.
        Returns:
            DisplayNote: The trimmed note.
        """
        lines = raw_text.replace("\r\n", "\n").strip().split("\n")
        exceeded_line_limit = len(lines) > max_lines

        candidate = "\n".join(lines[:max_lines])
        exceeded_character_limit = len(candidate) > max_characters
        if exceeded_character_limit:
            candidate = candidate[:max_characters]

        text = candidate.strip()
        truncated = exceeded_line_limit or exceeded_character_limit
        if truncated and not text.endswith(config.ELLIPSIS):
            text += config.ELLIPSIS

        title = os.path.splitext(os.path.basename(path))[0]
        return cls(title=title, text=text, is_truncated=truncated)


@dataclass(frozen=True)
class NotePayload:
    note: DisplayNote
    available_count: int


def validate_mode(mode: str) -> str:
    if mode not in config.VIEWING_MODES:
        raise ValueError(f"Unknown viewing mode '{mode}'. Choose from: {', '.join(config.VIEWING_MODES)}.")
    return mode


class NoteSource:
    """
    The ordered list of notes inside a chosen folder.
    """
    def __init__(self, directory: str, text_extensions: List[str]):
        self.directory = directory
        self.text_extensions = [ext.lower() for ext in text_extensions]
        self._notes = None

    def index(self) -> List[str]:
        """
        Lists the notes directly inside the folder. The result is cached until invalidate() is called.
        Returns:
            List[str]: Note paths sorted by case-insensitive file name.
        """
        if self._notes is not None:
            return self._notes

        try:
            filenames = os.listdir(self.directory)
        except OSError as e:
            raise GenericNoteError(f"Could not open the folder '{os.path.basename(self.directory)}': {e.strerror or e}") from e

        notes = []
        for filename in filenames:
            if filename.startswith('.'):
                continue
            if os.path.splitext(filename)[1].lower() not in self.text_extensions:
                continue
            filepath = os.path.join(self.directory, filename)
            if not os.path.isfile(filepath):
                continue
            notes.append(filepath)

        notes.sort(key=lambda p: os.path.basename(p).casefold())
        self._notes = notes
        return notes

    def invalidate(self):
        self._notes = None


class NotePicker:
    """
    Chooses the next note, either at random or by walking the list in order.
    """
    def __init__(self, mode: str = config.DEFAULT_MODE, rng: Optional[random.Random] = None):
        self.mode = validate_mode(mode)
        self.rng = rng or random.Random()
        self.cursor = 0

    def set_mode(self, mode: str):
        """
        Switches the viewing mode. Re-selecting the current mode keeps the cursor where it is.
        Args:
            mode (str): 'random' or 'sequential'.
        """
        validate_mode(mode)
        if mode == self.mode:
            return
        self.mode = mode
        self.reset()

    def reset(self):
        self.cursor = 0

    def pick(self, notes: List[str]) -> str:
        """
        Picks one note from the list.
        Args:
            notes (List[str]): The current note list.
        Returns:
            str: The chosen note path.
        """
        if not notes:
            raise NoTextFilesError()

        if self.mode == 'random':
            return self.rng.choice(notes)

        index = self.cursor % len(notes)
        self.cursor = (index + 1) % len(notes)
        return notes[index]


class NoteReader:
    def __init__(self, max_lines: int = config.MAX_LINES, max_characters: int = config.MAX_CHARACTERS):
        self.max_lines = max_lines
        self.max_characters = max_characters

    def read(self, path: str) -> DisplayNote:
        """
        Reads and trims a note. UTF-8 is tried first, then ASCII.
        Args:
            path (str): The note file.
        Returns:
            DisplayNote: The note ready for display.
        """
        file_name = os.path.basename(path)
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise GenericNoteError(f"Could not open {file_name}: {e.strerror or e}") from e

        raw_text = None
        for encoding in ('utf-8', 'ascii'):
            try:
                raw_text = data.decode(encoding)
                break
            except UnicodeDecodeError:
                continue
        if raw_text is None:
            raise UnreadableFileError(file_name)

        return DisplayNote.make(path, raw_text, self.max_lines, self.max_characters)


class NoteFetcher:
    """
    Scans the folder, picks one note, reads it and trims it for display.
    """
    def __init__(self, picker: NotePicker, reader: NoteReader, text_extensions: List[str]):
        self.picker = picker
        self.reader = reader
        self.text_extensions = text_extensions
        self.source = None

    def open_directory(self, directory: str):
        if self.source is not None and self.source.directory == directory:
            return
        self.source = NoteSource(directory, self.text_extensions)
        self.picker.reset()

    def invalidate(self):
        if self.source is not None:
            self.source.invalidate()

    def fetch(self) -> NotePayload:
        if self.source is None:
            raise GenericNoteError("No folder selected.")

        try:
            notes = self.source.index()
            if not notes:
                raise NoTextFilesError(self.text_extensions)
            path = self.picker.pick(notes)
            note = self.reader.read(path)
        except NoteError:
            # The next attempt rescans, so added or fixed files are picked up.
            self.source.invalidate()
            raise

        return NotePayload(note=note, available_count=len(notes))


class NotesViewModel:
    """
    Presentation state for a note viewer, backed by a single background worker.

    Fetches run one at a time on the worker. Their results are queued and applied
    on the UI thread by process_queue(), so the front end only ever reads state
    that it changed itself.
    """
    def __init__(self, text_extensions: List[str] = config.TEXT_EXTENSIONS, max_lines: int = config.MAX_LINES,
                 max_characters: int = config.MAX_CHARACTERS, mode: str = config.DEFAULT_MODE,
                 rng: Optional[random.Random] = None):
        self.current_note = None
        self.is_loading = False
        self.error_message = None
        self.note_count = 0
        self.needs_directory_selection = True
        self.mode = validate_mode(mode)
        self.directory = None

        self.messages = queue.Queue()
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="notes-loader")
        self._fetcher = NoteFetcher(NotePicker(mode, rng), NoteReader(max_lines, max_characters), text_extensions)

    @property
    def has_active_directory(self) -> bool:
        return self.directory is not None

    def set_directory(self, directory: str) -> Optional[Future]:
        """
        Selects the folder to show notes from and loads the first note.
        Args:
            directory (str): The chosen folder.
        Returns:
            Optional[Future]: The pending fetch, or None if nothing was started.
        """
        if not os.path.isdir(directory):
            self.error_message = str(NotAFolderError())
            self.needs_directory_selection = True
            return None

        self.directory = directory
        self.needs_directory_selection = False
        self.error_message = None
        self._executor.submit(self._fetcher.open_directory, directory)
        return self.shuffle()

    def set_mode(self, mode: str):
        validate_mode(mode)
        if mode == self.mode:
            return
        self.mode = mode
        self._executor.submit(self._fetcher.picker.set_mode, mode)

    def reload(self):
        self._executor.submit(self._fetcher.invalidate)

    def retry(self) -> Optional[Future]:
        if not self.has_active_directory:
            self.needs_directory_selection = True
            return None
        return self.shuffle()

    def shuffle(self) -> Optional[Future]:
        """
        Starts loading the next note in the background.
        Returns:
            Optional[Future]: The pending fetch, or None while another fetch is running or no folder is set.
        """
        with self._lock:
            if self.is_loading:
                return None
            if self.directory is None:
                self.needs_directory_selection = True
                return None
            self.is_loading = True
            self.error_message = None
        return self._executor.submit(self._load_note)

    def _load_note(self) -> Dict:
        """The function that runs on the background worker."""
        try:
            payload = self._fetcher.fetch()
            message = {'type': 'note', 'note': payload.note, 'count': payload.available_count}
        except NoteError as e:
            message = {'type': 'error', 'text': str(e)}
        except Exception as e:
            message = {'type': 'error', 'text': str(e) or e.__class__.__name__}
        self.messages.put(message)
        return message

    def process_queue(self) -> Optional[Dict]:
        """
        Applies one finished fetch to the presentation state. Call this from the UI thread.
        Returns:
            Optional[Dict]: The applied message, or None if nothing was waiting.
        """
        try:
            message = self.messages.get_nowait()
        except queue.Empty:
            return None

        with self._lock:
            self.is_loading = False
        if message['type'] == 'note':
            self.note_count = message['count']
            self.current_note = message['note']
            self.error_message = None
        elif message['type'] == 'error':
            self.note_count = 0
            self.current_note = None
            self.error_message = message['text']
        return message

    def shutdown(self):
        self._executor.shutdown(wait=True)
