# ================================
# file: gui/visualizer.py
# ================================
from __future__ import annotations
import math
import matplotlib
import matplotlib.pyplot as plt
import matplotlib.patches as patches

from core.config import (
    ROBOT_HALF, SENSOR_NAMES, SENSOR_COLORS, DISPLAY_DECIMALS,
    GUI_FIGSIZE, CANVAS_DEFAULT_PX, CANVAS_PAD_RATIO,
)
from core.coords import FieldView, obstacle_corners
from core.types import Obstacle, Landmark
from sim.field_world import FieldWorld, ROBOT_ID

OFFSET_KEY_STEP = 0.1   # sensor slide per '+'/'-' key press
PICK_RADIUS_PX = 16.0
HANDLE_RADIUS_PX = 10.0


def select_backend(interactive: bool) -> str:
    """Pick the first usable interactive backend, or Agg for headless use."""
    if interactive:
        for backend in ("TkAgg", "Qt5Agg", "QtAgg", "MacOSX"):
            try:
                matplotlib.use(backend, force=True)
                print(f"[GUI] using matplotlib backend: {backend}")
                return backend
            except Exception as e:
                print(f"[GUI] backend {backend} unavailable: {e}")
    matplotlib.use("Agg", force=True)
    print("[GUI] using non-interactive backend: Agg")
    return "Agg"


class FieldVisualizer:
    """Matplotlib view/editor of a FieldWorld.

    Mouse: drag robot/objects, drag the round handle of the selected robot or
    obstacle to rotate it. The pointer's field X/Y shows bottom-left. Keys: o/l add obstacle/landmark, delete removes the
    selection, c clears everything, 1-4 pick a sensor, +/- slide it.
    """

    def __init__(self, world: FieldWorld, interactive: bool = True, recorder=None,
                 logger_func=None, log_file=None) -> None:
        self.world = world
        self.recorder = recorder
        self.logger_func = logger_func
        self.log_file = log_file
        self.interactive = select_backend(interactive) != "Agg"
        self.active_sensor = 0
        self.cursor = None

        self.fig, self.ax = plt.subplots(figsize=GUI_FIGSIZE)
        self.view = FieldView(CANVAS_DEFAULT_PX, world.field_units)
        self._cids = [
            self.fig.canvas.mpl_connect("button_press_event", self.on_press),
            self.fig.canvas.mpl_connect("motion_notify_event", self.on_motion),
            self.fig.canvas.mpl_connect("button_release_event", self.on_release),
            self.fig.canvas.mpl_connect("key_press_event", self.on_key),
            self.fig.canvas.mpl_connect("axes_leave_event", self.on_leave),
        ]
        self._cursor_text = self.fig.text(0.01, 0.01, "", fontsize=8, family="monospace")
        self._show_cursor()
        self.update()

    # ---- pick radii ----
    def _sync_view(self) -> None:
        # axes span the field edge to edge; FieldView's inner area must match it
        bbox = self.ax.get_window_extent()
        if bbox.width > 0:
            self.view.resize(min(bbox.width, bbox.height) / (1.0 - 2.0 * CANVAS_PAD_RATIO))

    def _radii(self):
        self._sync_view()
        return self.view.px_to_units(PICK_RADIUS_PX), self.view.px_to_units(HANDLE_RADIUS_PX)

    # ---- events ----
    def on_press(self, event) -> None:
        if event.inaxes is not self.ax or event.button != 1 or event.xdata is None:
            return
        hit_r, handle_r = self._radii()
        self.world.begin_drag(event.xdata, event.ydata, hit_r, handle_r)
        self.update()

    def cursor_at(self, x: float, y: float):
        """Field point under a display pixel, None outside the field."""
        self._sync_view()
        bbox = self.ax.get_window_extent()
        p = self.view.pad()
        cx, cy = p + (x - bbox.x0), p + (bbox.y1 - y)
        if not self.view.inside_field(cx, cy):
            return None
        return self.view.canvas_to_field(cx, cy)

    def _show_cursor(self) -> None:
        if self.cursor is None:
            self._cursor_text.set_text("X: -  Y: -")
        else:
            self._cursor_text.set_text(f"X: {self.cursor[0]:.2f}  Y: {self.cursor[1]:.2f}")

    def on_motion(self, event) -> None:
        self.cursor = self.cursor_at(event.x, event.y) if event.inaxes is self.ax else None
        self._show_cursor()
        if (self.world.dragging is not None and event.inaxes is self.ax
                and event.xdata is not None and self.world.drag_to(event.xdata, event.ydata)):
            self.update()
        else:
            self.fig.canvas.draw_idle()

    def on_leave(self, event) -> None:
        self.world.end_drag()
        self.cursor = None
        self._show_cursor()
        self.fig.canvas.draw_idle()

    def on_release(self, event) -> None:
        self.world.end_drag()

    def on_key(self, event) -> None:
        key = event.key or ""
        w = self.world
        if key == "o":
            w.add_object("obstacle")
        elif key == "l":
            w.add_object("landmark")
        elif key in ("delete", "backspace"):
            if w.selected not in (None, ROBOT_ID):
                w.remove_object(w.selected)
        elif key == "c":
            w.clear_all()
        elif key in ("1", "2", "3", "4"):
            self.active_sensor = int(key) - 1
        elif key in ("+", "="):
            i = self.active_sensor
            w.set_sensor_offset(i, w.sensor_offsets[i] + OFFSET_KEY_STEP)
        elif key in ("-", "_"):
            i = self.active_sensor
            w.set_sensor_offset(i, w.sensor_offsets[i] - OFFSET_KEY_STEP)
        else:
            return
        self.update()

    # ---- drawing ----
    def _draw_field(self) -> None:
        ax = self.ax
        n = int(round(self.world.field_units))
        ax.set_facecolor("#12141f")
        for v in range(1, n):
            ax.axhline(v, color="#1b1f35", lw=0.5, zorder=0)
            ax.axvline(v, color="#1b1f35", lw=0.5, zorder=0)
        ax.add_patch(patches.Rectangle((0, 0), self.world.field_units, self.world.field_units,
                                       fill=False, ec="#4c4f8a", lw=2))
        ax.set_xlim(0, self.world.field_units)
        ax.set_ylim(0, self.world.field_units)
        ax.set_xticks(range(0, n + 1))
        ax.set_yticks(range(0, n + 1))
        ax.set_aspect("equal")
        ax.set_xlabel("X")
        ax.set_ylabel("Y")

    def _draw_obstacle(self, o: Obstacle) -> None:
        sel = self.world.selected == o.id
        corners = obstacle_corners(o.x, o.y, o.width, o.height, o.angle)
        self.ax.add_patch(patches.Polygon(corners, closed=True,
                                          fc="#fca5a5" if sel else "#dc2626",
                                          ec="#fecaca" if sel else "#f87171",
                                          lw=2 if sel else 1.5, zorder=2))
        self.ax.text(o.x, o.y - 0.5 * o.height - 0.3, o.label, color="#94a3b8",
                     ha="center", fontsize=8, zorder=5)
        if sel:
            hx, hy = self.world.obstacle_rot_handle(o)
            self.ax.plot([o.x, hx], [o.y, hy], color="#f87171", alpha=0.4, lw=1, zorder=3)
            self.ax.plot(hx, hy, "o", ms=7, mfc="#fecaca", mec="#f87171", zorder=6)

    def _draw_landmark(self, lm: Landmark) -> None:
        sel = self.world.selected == lm.id
        self.ax.plot(lm.x, lm.y, "^", ms=12, mfc="#93c5fd" if sel else "#3b82f6",
                     mec="#bfdbfe" if sel else "#60a5fa", zorder=4)
        self.ax.text(lm.x, lm.y - 0.45, lm.label, color="#94a3b8", ha="center", fontsize=8, zorder=5)

    def _draw_robot(self) -> None:
        r = self.world.robot
        sel = self.world.selected == ROBOT_ID
        body = obstacle_corners(r.x, r.y, 2 * ROBOT_HALF, 2 * ROBOT_HALF, r.heading)
        self.ax.add_patch(patches.Polygon(body, closed=True,
                                          fc="#c4b5fd" if sel else "#8b5cf6",
                                          ec="#c4b5fd", lw=2, zorder=4))
        th = math.radians(r.heading)
        self.ax.arrow(r.x, r.y, ROBOT_HALF * math.cos(th), ROBOT_HALF * math.sin(th),
                      head_width=0.15, head_length=0.15, fc="white", ec="white",
                      length_includes_head=True, zorder=5)
        if sel:
            hx, hy = self.world.robot_rot_handle()
            self.ax.plot([r.x, hx], [r.y, hy], color="#a78bfa", alpha=0.35, lw=1, zorder=3)
            self.ax.plot(hx, hy, "o", ms=7, mfc="#ede9fe", mec="#a78bfa", zorder=6)

    def _draw_sensors(self, readings) -> None:
        for i, rd in enumerate(readings):
            col = SENSOR_COLORS[i]
            (px, py), (ex, ey) = rd.position, rd.hit_point()
            self.ax.plot([px, ex], [py, ey], "--", color=col, alpha=0.55, lw=1, zorder=3)
            self.ax.plot(ex, ey, "o", ms=4, color=col, zorder=6)
            self.ax.plot(px, py, "o", ms=6, mfc=col, mec="#0f1117",
                         mew=1.5 if i == self.active_sensor else 1, zorder=7)

    def readout(self, readings) -> str:
        return "   ".join(f"d{i + 1} {name}: {rd.distance:.{DISPLAY_DECIMALS}f}"
                          for i, (name, rd) in enumerate(zip(SENSOR_NAMES, readings)))

    def update(self):
        """Recompute the four readings and redraw everything. Returns the readings."""
        readings = self.world.readings()
        if self.recorder is not None:
            self.recorder.log_readings(self.world.robot, self.world.sensor_offsets, readings)

        self.ax.clear()
        self._draw_field()
        for o in self.world.objects:
            if isinstance(o, Obstacle):
                self._draw_obstacle(o)
            else:
                self._draw_landmark(o)
        self._draw_robot()
        self._draw_sensors(readings)
        r = self.world.robot
        self.ax.set_title(f"Robot ({r.x:.2f}, {r.y:.2f}) {r.heading:.1f}°\n{self.readout(readings)}",
                          fontsize=9)
        self.fig.canvas.draw_idle()
        return readings

    def show(self) -> None:
        if self.interactive:
            plt.show()

    def save(self, path: str) -> None:
        self.fig.savefig(path, dpi=100)
        if self.logger_func and self.log_file:
            self.logger_func(self.log_file, f"snapshot saved to {path}", "GUI")

    def close(self) -> None:
        for cid in self._cids:
            self.fig.canvas.mpl_disconnect(cid)
        plt.close(self.fig)
