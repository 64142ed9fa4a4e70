from nfbuilder.templates.process_templates import (
    PROCESS_TEMPLATES,
    apply_template,
    get_template,
)

__all__ = ["PROCESS_TEMPLATES", "apply_template", "get_template"]
