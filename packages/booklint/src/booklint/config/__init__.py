from .loader import DEFAULT_CONFIG_NAME, LintConfig, load_config

__all__ = ["DEFAULT_CONFIG_NAME", "LintConfig", "load_config"]
