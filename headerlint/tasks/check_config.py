from pathlib import Path

from headerlint.config import load_config
from headerlint.header import validate_template
from headerlint.messages import info, success

def check_config(path: Path | None = None) -> None:
    config = load_config(path)
    validate_template(config.header.template)
    info(f"Config: {config.path or 'defaults'}")
    success("Config is valid")
