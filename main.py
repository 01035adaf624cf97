# Main.py
""""" Entry point for the Expression Calculator.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Configure logging, load configuration and start the Qt GUI

"""""
import logging
import sys
from pathlib import Path

from Calculator import config_manager as config_manager, UI as UI


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent


logger = logging.getLogger("Calculator")


def setup_logging(debug=False):
    """One stream handler for the whole Calculator package."""
    # Prevent double handlers when main() runs twice in one interpreter
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[CALC] [%(levelname)s] %(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.

      In production (.exe) the files are embedded by the bundler and this check is skipped.
    """

    package_dir = PROJECT_ROOT / "Calculator"

    REQUIRED = [
        package_dir / "UI.py",
        package_dir / "MathEngine.py",
        package_dir / "ScientificEngine.py",
        package_dir / "History.py",
        package_dir / "config_manager.py",
        package_dir / "error.py",
        PROJECT_ROOT / "config.json",
        PROJECT_ROOT / "ui_strings.json",
    ]

    missing_files = [file_path.name for file_path in REQUIRED if not file_path.exists()]

    if missing_files:
        logger.error("The following files are missing or in the wrong location: %s", ", ".join(missing_files))
        sys.exit(1)


def main():

    """
    Load configuration and start the GUI.
    - Keep this thin: no business logic here.
    """

    all_settings = config_manager.load_setting_value("all")
    setup_logging(all_settings["debug"])
    logger.info("Config loaded: %s", all_settings)

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()


if __name__ == "__main__":
    setup_logging()
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        logger.info("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        logger.info("Production mode (.exe) is starting...")
    main()
