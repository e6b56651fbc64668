from headerlint.config import Config
from headerlint.header import build_template, validate_template

def render_template(config: Config) -> str:
    """
    Returns the header text files are expected to start with under `config`.
    """
    header = config.header
    validate_template(header.template)
    return build_template(header.template, header.code_owner, header.force_current_year)
