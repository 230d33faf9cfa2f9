"""Graphics for spinwheel."""

from spinwheel.graphics.wheel_renderer import (
    SlotGeometry,
    render_wheel,
    slot_geometry,
    slot_index_map,
)

__all__ = ["SlotGeometry", "render_wheel", "slot_geometry", "slot_index_map"]
