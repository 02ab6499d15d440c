from .report import Report, render_json, render_text

__all__ = ["Report", "render_json", "render_text"]
