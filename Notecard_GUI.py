import rumps
import config
from core import NotesViewModel
from utils import render_note, retry_label
from AppKit import NSOpenPanel, NSFileHandlingPanelOKButton

MODE_MENU_TITLES = {
    'random': 'Random Order',
    'sequential': 'Sequential Loop',
}


class NotecardApp(rumps.App):
    def __init__(self):
        super(NotecardApp, self).__init__(config.APP_TITLE, title=config.APP_TITLE)
        self.view_model = NotesViewModel(
            text_extensions=config.TEXT_EXTENSIONS,
            max_lines=config.MAX_LINES,
            max_characters=config.MAX_CHARACTERS,
            mode=config.DEFAULT_MODE
        )
        self.menu = [
            'Choose Folder…',
            'Next Note',
            'Reload Folder',
            None,
            MODE_MENU_TITLES['random'],
            MODE_MENU_TITLES['sequential'],
        ]
        self.update_mode_checkmarks()
        self.has_presented_initial_picker = False
        self.queue_timer = rumps.Timer(self.process_queue, config.QUEUE_POLL_INTERVAL)
        self.queue_timer.start()

    def cleanup(self):
        """Stop the background worker on exit."""
        self.queue_timer.stop()
        self.view_model.shutdown()

    def process_queue(self, _):
        """Apply finished work from the background worker."""
        if not self.has_presented_initial_picker:
            self.has_presented_initial_picker = True
            if self.view_model.needs_directory_selection:
                self.choose_folder(None)
                return

        message = self.view_model.process_queue()
        self.title = config.LOADING_TITLE if self.view_model.is_loading else config.APP_TITLE
        if message is None:
            return

        if message['type'] == 'note':
            self.show_note()
        elif message['type'] == 'error':
            self.show_error(message['text'])

    def show_note(self):
        note = self.view_model.current_note
        response = rumps.alert(
            title=note.title,
            message=render_note(note, self.view_model.note_count),
            ok="Next",
            cancel="Done"
        )
        if response == 1:
            self.next_note(None)

    def show_error(self, text):
        response = rumps.alert(
            title=config.APP_TITLE,
            message=text,
            ok=retry_label(self.view_model.has_active_directory),
            cancel="Cancel"
        )
        if response != 1:
            return
        if self.view_model.has_active_directory:
            self.view_model.retry()
        else:
            self.choose_folder(None)

    def select_directory(self):
        """Open a native macOS directory selection dialog."""
        panel = NSOpenPanel.openPanel()
        panel.setCanChooseDirectories_(True)
        panel.setCanChooseFiles_(False)
        panel.setAllowsMultipleSelection_(False)

        if panel.runModal() == NSFileHandlingPanelOKButton:
            return panel.URLs()[0].path()
        return None

    def update_mode_checkmarks(self):
        for mode, title in MODE_MENU_TITLES.items():
            self.menu[title].state = 1 if mode == self.view_model.mode else 0

    @rumps.clicked('Choose Folder…')
    def choose_folder(self, _):
        directory = self.select_directory()
        if not directory:
            return
        self.view_model.set_directory(directory)
        if self.view_model.error_message:
            self.show_error(self.view_model.error_message)

    @rumps.clicked('Next Note')
    def next_note(self, _):
        if self.view_model.needs_directory_selection:
            self.choose_folder(None)
            return
        self.view_model.shuffle()

    @rumps.clicked('Reload Folder')
    def reload_folder(self, _):
        self.view_model.reload()
        self.view_model.shuffle()

    @rumps.clicked(MODE_MENU_TITLES['random'])
    def random_mode(self, _):
        self.view_model.set_mode('random')
        self.update_mode_checkmarks()

    @rumps.clicked(MODE_MENU_TITLES['sequential'])
    def sequential_mode(self, _):
        self.view_model.set_mode('sequential')
        self.update_mode_checkmarks()


def main():
    app = NotecardApp()
    try:
        app.run()
    finally:
        app.cleanup()


if __name__ == "__main__":
    main()
