"""Client for the Hyprland and hyprpaper IPC sockets: options, wallpapers and events."""

__version__ = "0.4.0"
__all__ = ["shared", "keyword", "hyprpaper", "events", "primer", "listener"]