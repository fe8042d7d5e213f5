import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from BackEnd.repos.session_repo import SessionRepo
from BackEnd.repos.settings_repo import SettingsRepo
from BackEnd.services.command_dispatch import CommandDispatcher
from BackEnd.services.cycle_controller import SessionCycleController
from BackEnd.services.sleep_watcher import LogindSleepWatcher
from BackEnd.services.timer_engine import TimerEngine
from FrontEnd.tray import TrayApp


def main():
    logging.basicConfig(
        level=os.environ.get("POMODORO_TRAY_LOG", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    settings_repo = SettingsRepo()
    store = SessionRepo()
    settings = settings_repo.load_config()

    engine = TimerEngine(minutes=settings.work_minutes)
    controller = SessionCycleController(engine, store=store, settings=settings)
    dispatcher = CommandDispatcher(controller)
    sleep_watcher = LogindSleepWatcher(dispatcher.events, parent=app)
    sleep_watcher.start()
    tray = TrayApp(controller, dispatcher, store, settings_repo)
    dispatcher.show_statistics = tray.show_statistics

    sys.exit(app.exec())

if __name__ == "__main__":
    main()
