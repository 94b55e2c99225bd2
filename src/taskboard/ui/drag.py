"""Mouse drag plumbing for the board.

Two mixins:
- DraggableMixin: on dragged widgets, owns the "flying" phase
- DropTarget: on containers, owns the "landing" phase

The screen routes mouse moves and releases to ``screen._active_draggable``
while a drag is in flight.
"""

from __future__ import annotations

from textual.geometry import Offset


class DropTarget:
    """Mixin for widgets that can accept drops.

    Returns False to ignore (bubbles to parent), True to consume.
    """

    def drag_over(self, draggable: DraggableMixin, x: int, y: int) -> bool:
        """Called while a draggable hovers over this target. Return True to accept."""
        return False

    def drag_away(self, draggable: DraggableMixin, x: int, y: int) -> None:
        """Called when a draggable leaves this target, with the pointer position."""

    def try_drop(self, draggable: DraggableMixin, x: int, y: int) -> bool:
        """Called on mouse-up to attempt the drop. Return True if accepted."""
        return False


class DraggableMixin:
    """Mixin for widgets that can be dragged.

    Subclasses should:
    - Call _init_draggable() in __init__
    - Implement draggable_started() and draggable_cancelled()
    - Implement draggable_clicked() for click-without-drag behavior
    - Optionally override DRAG_THRESHOLD
    """

    DRAG_THRESHOLD = 2

    def _init_draggable(self) -> None:
        self._drag_start_pos: Offset | None = None
        self._dragging = False
        self._current_target: DropTarget | None = None

    @property
    def is_dragging(self) -> bool:
        return self._dragging

    def on_mouse_down(self, event) -> None:
        if event.button != 1:
            return
        event.stop()
        event.prevent_default()
        self._drag_start_pos = Offset(event.screen_x, event.screen_y)
        self.capture_mouse()

    def on_mouse_move(self, event) -> None:
        if self._drag_start_pos is None:
            return
        event.stop()
        event.prevent_default()
        dx = abs(event.screen_x - self._drag_start_pos.x)
        dy = abs(event.screen_y - self._drag_start_pos.y)
        if dx > self.DRAG_THRESHOLD or dy > self.DRAG_THRESHOLD:
            self.release_mouse()
            self._drag_start_pos = None
            self._drag_start()

    def on_mouse_up(self, event) -> None:
        event.stop()
        event.prevent_default()
        self.release_mouse()
        if self._drag_start_pos is not None:
            self._drag_start_pos = None
            self.draggable_clicked()

    def _drag_start(self) -> None:
        """Begin drag: mark the widget and register it on the screen."""
        self._dragging = True
        self.add_class("dragging")
        self.screen.set_focus(None)
        self.screen._active_draggable = self
        self.screen.capture_mouse()
        self.draggable_started()

    def _drag_move(self, x: int, y: int) -> None:
        """Called by screen on mouse move during drag."""
        new_target = self._find_drop_target(x, y)

        if new_target is self._current_target:
            if new_target is not None:
                new_target.drag_over(self, x, y)
            return

        if self._current_target is not None:
            self._current_target.drag_away(self, x, y)
        self._current_target = new_target
        if new_target is not None:
            new_target.drag_over(self, x, y)

    def _drag_finish(self, x: int, y: int) -> None:
        """Called by screen on mouse-up. Try to drop, innermost-out."""
        self.screen.release_mouse()

        dropped = False
        for target in self._iter_drop_targets(x, y):
            if target.try_drop(self, x, y):
                dropped = True
                break

        if not dropped:
            self._drag_cancel()
            return

        self._current_target = None
        self._drag_cleanup()

    def _drag_cancel(self) -> None:
        """Cancel drag: drag_away + cleanup."""
        self.screen.release_mouse()
        if self._current_target is not None:
            self._current_target.drag_away(self, -1, -1)
            self._current_target = None
        self.draggable_cancelled()
        self._drag_cleanup()

    def _drag_cleanup(self) -> None:
        """Clear state and deregister from screen."""
        self._dragging = False
        self.remove_class("dragging")
        if getattr(self.screen, "_active_draggable", None) is self:
            self.screen._active_draggable = None

    def _find_drop_target(self, x: int, y: int) -> DropTarget | None:
        """Find the innermost DropTarget at screen position."""
        targets = self._iter_drop_targets(x, y)
        return targets[0] if targets else None

    def _iter_drop_targets(self, x: int, y: int) -> list[DropTarget]:
        """All DropTargets at position, innermost-out."""
        targets = []
        try:
            widgets = self.screen.get_widgets_at(x, y)
        except Exception:
            return targets

        seen = set()
        for widget, _region in widgets:
            candidate = widget
            while candidate is not None:
                if isinstance(candidate, DropTarget) and candidate is not self:
                    cid = id(candidate)
                    if cid not in seen:
                        seen.add(cid)
                        targets.append(candidate)
                candidate = candidate.parent
        return targets

    def draggable_started(self) -> None:
        """Called once the pointer moved far enough to count as a drag."""
        raise NotImplementedError

    def draggable_cancelled(self) -> None:
        """Called when the drag ended without landing on a target."""
        raise NotImplementedError

    def draggable_clicked(self) -> None:
        """Called when mouse released without dragging. Override for click behavior."""
        raise NotImplementedError
