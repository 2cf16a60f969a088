from .paths import BoardPaths, atomic_write_text, ensure_dir, safe_name  # noqa: F401
