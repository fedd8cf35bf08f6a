from formsmith.lib.hooks import hooks, action, filter, add_action, add_filter, do_action, apply_filters

__all__ = [
    "hooks",
    "action",
    "filter",
    "add_action",
    "add_filter",
    "do_action",
    "apply_filters",
]
