from .config import AttentionConfig, load_config, save_config

__all__ = [
    "AttentionConfig",
    "load_config",
    "save_config",
]
