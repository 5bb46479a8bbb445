#!/usr/bin/env python3
import os
import sys
import argparse
from typing import List, Optional
from tqdm import tqdm
import config
from core import NoTextFilesError, NoteError, NoteFetcher, NotePicker, NoteReader, NoteSource, UnreadableFileError
from utils import display_note, format_note_count


class NoteChecker:
    """
    Reads every note in a folder and reports the ones that cannot be displayed.
    """
    def __init__(self, source: NoteSource, reader: NoteReader):
        self.source = source
        self.reader = reader

    def run(self) -> List[str]:
        """
        Runs the check.
        Returns:
            List[str]: A message for every note that failed to load.
        """
        notes = self.source.index()
        if not notes:
            raise NoTextFilesError(self.source.text_extensions)
        print(f"➡️  Checking {format_note_count(len(notes))} in '{self.source.directory}'...")
        failures = []
        for path in tqdm(notes, desc="Reading notes"):
            try:
                self.reader.read(path)
            except UnreadableFileError as e:
                failures.append(str(e))
            except NoteError as e:
                failures.append(f"{os.path.basename(path)}: {e}")

        if failures:
            print(f"\n⚠️  {len(failures)} of {format_note_count(len(notes))} could not be read:")
            for failure in failures:
                print(f"    └── {failure}")
        else:
            print(f"✅ All {format_note_count(len(notes))} can be displayed.")
        return failures


class Notecard:
    """
    Shows notes from a folder of plain-text files in the terminal.
    """
    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self):
        """
        Creates the command-line argument parser.
        Returns:
            argparse.ArgumentParser: The argument parser.
        """
        parser = argparse.ArgumentParser(description="Notecard: show plain-text notes from a folder, one at a time.")
        parser.add_argument("directory", help="The folder holding the notes.")
        parser.add_argument("--mode", choices=list(config.VIEWING_MODES), default=config.DEFAULT_MODE, help=f"Pick notes at 'random' or loop through them in order (default: {config.DEFAULT_MODE}).")
        parser.add_argument("-n", "--count", type=int, default=config.NOTES_PER_RUN, help=f"How many notes to show (default: {config.NOTES_PER_RUN}).")
        parser.add_argument("-i", "--interactive", action="store_true", help="Keep showing notes until you answer 'n' (ignores --count).")
        parser.add_argument("--max-lines", type=int, default=config.MAX_LINES, help=f"Lines shown per note (default: {config.MAX_LINES}).")
        parser.add_argument("--max-chars", type=int, default=config.MAX_CHARACTERS, help=f"Characters shown per note (default: {config.MAX_CHARACTERS}).")
        parser.add_argument("--check", action="store_true", help="Read every note and report the ones that cannot be displayed.")
        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Runs the main application logic.
        Args:
            argv (Optional[List[str]]): Arguments to parse instead of sys.argv.
        Returns:
            int: The exit status.
        """
        args = self.parser.parse_args(argv)

        target_directory = os.path.expanduser(args.directory)
        if not os.path.isdir(target_directory):
            sys.exit(f"❌ Error: Folder '{target_directory}' not found.")
        if args.count < 1:
            sys.exit("❌ Error: --count must be at least 1.")
        if args.max_lines < 1:
            sys.exit("❌ Error: --max-lines must be at least 1.")
        if args.max_chars < 1:
            sys.exit("❌ Error: --max-chars must be at least 1.")

        reader = NoteReader(args.max_lines, args.max_chars)

        if args.check:
            try:
                failures = NoteChecker(NoteSource(target_directory, config.TEXT_EXTENSIONS), reader).run()
            except NoteError as e:
                sys.exit(f"❌ {e}")
            return 1 if failures else 0

        fetcher = NoteFetcher(NotePicker(args.mode), reader, config.TEXT_EXTENSIONS)
        fetcher.open_directory(target_directory)

        shown = 0
        while shown < args.count or args.interactive:
            try:
                payload = fetcher.fetch()
            except NoteError as e:
                sys.exit(f"❌ {e}")
            display_note(payload.note, payload.available_count)
            shown += 1

            if not args.interactive:
                continue
            try:
                answer = input("Next note? (Y/n): ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if answer.lower().strip() in ('n', 'q'):
                break
        return 0


def main():
    notecard = Notecard()
    sys.exit(notecard.run())


if __name__ == "__main__":
    main()
