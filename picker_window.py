"""Date range picker window (tkinter): read-only field plus a popup month grid."""

import logging
from datetime import date
from tkinter import font as tkfont
import tkinter as tk
from typing import Callable

from calendar_logic import DAY_ABBR, MONTH_NAMES, build_month_grid, date_key, shift_month
from eligibility import EligibilityConstraints, can_navigate_to, is_eligible
from formatting import RangeOutput, build_output, input_caption, summarize
from selection import SelectionEngine
from settings import (
    constraints_from_settings,
    default_date_from_settings,
    load_settings,
    save_settings,
)

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
OTHER_MONTH_FG = "#999999"
DISABLED_FG = "#CCCCCC"
DISABLED_BG = "#F7F7F7"

_MAX_WEEKS = 6


def is_inside(widget_path: str, container_path: str) -> bool:
    """Return True if a Tk path name is the container or one of its descendants."""
    if widget_path == container_path:
        return True
    prefix = container_path if container_path.endswith(".") else container_path + "."
    return widget_path.startswith(prefix)


class _GridPanel:
    """Pre-allocated widget pool for one month (header + 6 weeks max)."""

    __slots__ = ("frame", "header", "btn_prev", "btn_next", "day_headers", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict,
                 on_press, on_motion) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.btn_prev = tk.Label(
            self.frame, text="←", font=fonts["nav"], bg=HEADER_BG, cursor="hand2",
        )
        self.btn_prev.grid(row=0, column=0, sticky="we")
        self.header = tk.Label(
            self.frame, font=fonts["header"], bg=HEADER_BG, fg="#333333",
        )
        self.header.grid(row=0, column=1, columnspan=5, sticky="we")
        self.btn_next = tk.Label(
            self.frame, text="→", font=fonts["nav"], bg=HEADER_BG, cursor="hand2",
        )
        self.btn_next.grid(row=0, column=6, sticky="we")

        self.day_headers: list[tk.Label] = []
        for col, abbr in enumerate(DAY_ABBR):
            fg = "#CC0000" if col >= 5 else "#333333"
            lbl = tk.Label(
                self.frame, text=abbr, font=fonts["bold"], bg=GRID_BG, fg=fg, width=3,
            )
            lbl.grid(row=1, column=col, pady=(2, 0))
            self.day_headers.append(lbl)

        self.day_cells: list[list[tk.Label]] = []
        for r in range(_MAX_WEEKS):
            row_cells: list[tk.Label] = []
            for c in range(7):
                cell = tk.Label(
                    self.frame, font=fonts["normal"], bg=GRID_BG, width=3,
                )
                cell.grid(row=r + 2, column=c, padx=1, pady=1)
                # Bind once; handlers only react to cells in _widget_dates.
                # Release is bound application-wide by the window.
                cell.bind("<ButtonPress-1>", on_press)
                cell.bind("<B1-Motion>", on_motion)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class PickerWindow:
    """Text field that opens a month grid for drag-selecting date ranges."""

    def __init__(self, on_output: Callable[[RangeOutput], None] | None = None) -> None:
        self.root = tk.Tk()
        self.root.title("Date Range Picker")
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._on_output = on_output
        self._setup_fonts()

        self.settings = load_settings()
        self.engine = SelectionEngine()

        today = date.today()
        self.month = today.month - 1
        self.year = today.year

        default = default_date_from_settings(self.settings)
        if default is not None:
            self.engine.set_default(default)
            self.month = default.month - 1
            self.year = default.year

        # Widget-to-date mapping for eligible cells (filled during render)
        self._widget_dates: dict[int, date] = {}
        # DateKey-to-widget mapping for highlight updates
        self._date_widgets: dict[str, tk.Label] = {}
        self._popup_visible = False

        self._build_shell()
        self._render()
        self._update_caption()

        self.root.bind("<Escape>", self._on_escape)
        # A drag may be released outside the grid
        self.root.bind_all("<ButtonRelease-1>", self._on_release, add="+")
        # Clicks outside the field and popup, or leaving the app, close the popup
        self.root.bind_all("<Button-1>", self._on_click_anywhere, add="+")
        self.root.bind("<FocusOut>", self._on_focus_out, add="+")
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_footer = tkfont.Font(family=base, size=9)

    # ------------------------------------------------------------------
    # Build shell (once): text field, popup grid, buttons, footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(padx=6, pady=4)

        self._caption = tk.StringVar()
        self._entry = tk.Entry(
            self._outer, textvariable=self._caption, state="readonly",
            font=self.font_normal, width=36, cursor="hand2",
        )
        self._entry.pack(fill="x")
        self._entry.bind("<Button-1>", lambda _e: self.toggle_popup())

        self._popup = tk.Frame(self._outer, bg=GRID_BG)

        self._panel = _GridPanel(
            self._popup,
            {"header": self.font_header, "bold": self.font_bold,
             "normal": self.font_normal, "nav": self.font_nav},
            self._on_press, self._on_motion,
        )
        self._panel.frame.pack(pady=(4, 0))
        self._panel.btn_prev.bind("<Button-1>", lambda _e: self.change_month(-1))
        self._panel.btn_next.bind("<Button-1>", lambda _e: self.change_month(1))

        actions = tk.Frame(self._popup, bg=GRID_BG)
        actions.pack(pady=(4, 0))
        tk.Button(actions, text="Clear", width=8, command=self.clear_selection).pack(
            side="left", padx=4,
        )
        tk.Button(actions, text="Pick", width=8, command=self.submit_selection).pack(
            side="left", padx=4,
        )

        self._footer_label = tk.Label(
            self._popup, font=self.font_footer, bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    # ------------------------------------------------------------------
    # Render the current month into the pooled cells
    # ------------------------------------------------------------------
    def constraints(self) -> EligibilityConstraints:
        return constraints_from_settings(self.settings, date.today())

    def _render(self) -> None:
        self._widget_dates.clear()
        self._date_widgets.clear()

        constraints = self.constraints()
        panel = self._panel
        panel.header.configure(text=f"{MONTH_NAMES[self.month]} {self.year}")
        grid = build_month_grid(self.month, self.year)

        for i in range(_MAX_WEEKS * 7):
            cell = panel.day_cells[i // 7][i % 7]
            if i >= len(grid):
                cell.configure(text="", bg=GRID_BG, cursor="")
                continue
            d = grid[i]
            self._date_widgets[date_key(d)] = cell
            if is_eligible(d, constraints):
                self._widget_dates[id(cell)] = d
            self._draw_cell(cell, d, constraints.today)

        panel.btn_prev.configure(
            fg="black" if self._can_shift(-1, constraints) else DISABLED_FG)
        panel.btn_next.configure(
            fg="black" if self._can_shift(1, constraints) else DISABLED_FG)
        self._update_footer()

    def _draw_cell(self, cell: tk.Label, d: date, today: date) -> None:
        enabled = id(cell) in self._widget_dates
        in_month = d.month - 1 == self.month
        bg, fg = self._day_colors(
            enabled, in_month, self.engine.is_selected(d), d == today, d.weekday() >= 5)
        cell.configure(
            text=str(d.day), bg=bg, fg=fg,
            font=self.font_bold if d == today else self.font_normal,
            cursor="hand2" if enabled else "",
        )

    @staticmethod
    def _day_colors(enabled: bool, in_month: bool, selected: bool,
                    is_today: bool, is_weekend: bool) -> tuple[str, str]:
        if not enabled:
            return DISABLED_BG, DISABLED_FG
        if selected:
            return SEL_BG, "black"
        if is_today:
            return GRID_BG, ACCENT
        if not in_month:
            return GRID_BG, OTHER_MONTH_FG
        if is_weekend:
            return GRID_BG, "#CC0000"
        return GRID_BG, "black"

    def _update_highlight(self) -> None:
        today = date.today()
        for d in self._widget_dates.values():
            self._draw_cell(self._date_widgets[date_key(d)], d, today)
        self._update_footer()

    def _update_footer(self) -> None:
        self._footer_label.configure(text=summarize(self.engine.contiguous_ranges()))

    # ------------------------------------------------------------------
    # Drag-to-select events
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d:
            self.engine.begin_gesture(d)
            self._update_highlight()

    def _on_motion(self, event: tk.Event) -> None:
        if not self.engine.is_dragging:
            return
        w = event.widget.winfo_containing(event.x_root, event.y_root)
        if w and id(w) in self._widget_dates:
            d = self._widget_dates[id(w)]
            if d != self.engine.drag.cursor:
                self.engine.update_gesture(d)
                self._update_highlight()

    def _on_release(self, _event: tk.Event) -> None:
        self.engine.end_gesture()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _can_shift(self, offset: int, constraints: EligibilityConstraints) -> bool:
        month, year = shift_month(self.month, self.year, offset)
        return can_navigate_to(month, year, constraints)

    def change_month(self, offset: int) -> None:
        month, year = shift_month(self.month, self.year, offset)
        if not can_navigate_to(month, year, self.constraints()):
            logger.debug("Navigation to %d-%02d refused", year, month + 1)
            return
        self.month, self.year = month, year
        self._render()

    def go_today(self) -> None:
        today = date.today()
        self.month = today.month - 1
        self.year = today.year
        self._render()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def output(self) -> RangeOutput:
        return build_output(self.engine, self.settings["output_style"])

    def _update_caption(self) -> None:
        self._caption.set(input_caption(self.engine, self.settings["output_style"]))

    def _notify(self) -> None:
        out = self.output()
        logger.info("Selection: %s", out.date_range or "(empty)")
        self.settings["last_selection"] = out.date_range
        save_settings(self.settings)
        if self._on_output is not None:
            self._on_output(out)

    def clear_selection(self) -> None:
        self.engine.clear()
        self._update_highlight()
        self._update_caption()
        self.toggle_popup()
        self._notify()

    def submit_selection(self) -> None:
        self._update_caption()
        self.toggle_popup()
        self._notify()

    def set_default_date(self, d: date) -> None:
        """Seed the selection with ``d`` and jump to its month."""
        self.engine.set_default(d)
        self.month = d.month - 1
        self.year = d.year
        self._render()
        self._update_caption()
        self._notify()

    def copy_selection(self) -> None:
        text = self.output().date_range
        self.root.clipboard_clear()
        self.root.clipboard_append(text)

    # ------------------------------------------------------------------
    # ESC ends a drag first, then closes the popup, then hides
    # ------------------------------------------------------------------
    def _on_escape(self, _event: tk.Event) -> None:
        if self.engine.is_dragging:
            self.engine.end_gesture()
        elif self._popup_visible:
            self.toggle_popup()
        else:
            self.hide()

    # ------------------------------------------------------------------
    # Popup / Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle_popup(self) -> None:
        if self._popup_visible:
            self._popup.pack_forget()
        else:
            self._render()
            self._popup.pack(pady=(4, 0))
        self._popup_visible = not self._popup_visible

    def _on_click_anywhere(self, event: tk.Event) -> None:
        if self._popup_visible and not is_inside(str(event.widget), str(self._outer)):
            self.toggle_popup()

    def _on_focus_out(self, _event: tk.Event) -> None:
        # FocusOut also fires when focus moves between our own widgets
        self.root.after(50, self._close_if_unfocused)

    def _close_if_unfocused(self) -> None:
        if not self._popup_visible or self.engine.is_dragging:
            return
        if self.root.focus_get() is None:
            self.toggle_popup()

    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self._render()
        self.root.deiconify()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.engine.end_gesture()
        self.root.withdraw()
