"""Entry point: glues pystray (daemon thread) with tkinter (main thread)."""

import ctypes
import logging
import os
import threading

from formatting import RangeOutput
from icon_gen import create_icon_image
from picker_window import PickerWindow
from tray_icon import create_tray

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("DATE_RANGE_PICKER_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main() -> None:
    _configure_logging()

    # DPI awareness so positions / fonts are crisp on Hi-DPI monitors (Windows only)
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        pass

    def on_output(out: RangeOutput) -> None:
        logger.debug("Output changed: %r", out)

    picker = PickerWindow(on_output=on_output)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        picker.root.after(0, picker.toggle)

    def on_copy() -> None:
        picker.root.after(0, picker.copy_selection)

    def on_today() -> None:
        picker.root.after(0, picker.go_today)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            picker.root.destroy()
        picker.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit,
                       on_copy=on_copy, on_today=on_today)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    logger.info("Date range picker running")
    picker.root.mainloop()


if __name__ == "__main__":
    main()
