"""
Typed surface of a plugin control (Silverlight-style object model).

Thin wrappers over `ScriptBridge`: each maps one well-known member of the
direct, content or settings namespace to a Python value. Boolean and integer
members are decoded strictly; a malformed value raises `DecodeFailure`.
"""

from __future__ import annotations

from .bridge import ScriptBridge
from .statement import Namespace


class PluginObject:
    def __init__(self, bridge: ScriptBridge) -> None:
        self.bridge = bridge

    # Direct members

    def is_version_supported(self, version: str) -> bool:
        return self.bridge.call_bool(Namespace.DIRECT, "isVersionSupported", version)

    def is_loaded(self) -> bool:
        return self.bridge.get_bool(Namespace.DIRECT, "isLoaded")

    @property
    def init_params(self) -> str:
        return self.bridge.get_direct_property("initParams")

    @property
    def root(self) -> str:
        return self.bridge.get_direct_property("root")

    @property
    def source(self) -> str:
        return self.bridge.get_direct_property("source")

    # Content members

    @property
    def accessibility(self) -> str:
        return self.bridge.get_content_property("accessibility")

    def actual_height(self) -> int:
        return self.bridge.get_int(Namespace.CONTENT, "actualHeight")

    def actual_width(self) -> int:
        return self.bridge.get_int(Namespace.CONTENT, "actualWidth")

    def is_full_screen(self) -> bool:
        return self.bridge.get_bool(Namespace.CONTENT, "fullScreen")

    def create_from_xaml(self, xaml: str, name_scope: str) -> None:
        """Create XAML content; the created element is not returned by value."""
        statement = self.bridge.statements.call(Namespace.CONTENT, "createFromXaml", (xaml, name_scope))
        self.bridge.execute(statement, expect_result=False)

    def find_name(self, name: str) -> str:
        return self.bridge.call_content_method("findName", name)

    # Settings members

    @property
    def background(self) -> str:
        return self.bridge.get_settings_property("background")

    def enable_framerate_counter(self) -> bool:
        return self.bridge.get_bool(Namespace.SETTINGS, "enableFramerateCounter")

    def enable_redraw_regions(self) -> bool:
        return self.bridge.get_bool(Namespace.SETTINGS, "enableRedrawRegions")

    def enable_html_access(self) -> bool:
        return self.bridge.get_bool(Namespace.SETTINGS, "enableHtmlAccess")

    def max_frame_rate(self) -> int:
        return self.bridge.get_int(Namespace.SETTINGS, "maxFrameRate")

    def windowless(self) -> bool:
        return self.bridge.get_bool(Namespace.SETTINGS, "windowless")


__all__ = ["PluginObject"]
