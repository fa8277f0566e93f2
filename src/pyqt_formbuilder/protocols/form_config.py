"""Base configuration class for form building.

Provides hooks for applications to customize engine and rendering behavior.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class FormBuilderConfig:
    """Process-wide defaults for form engines and widgets.

    Applications can subclass this to provide custom configuration.

    Attributes:
        locale: Message catalog and button labels ("es" or "en")
        strict_schema: Raise SchemaError for dangling dependsOn references,
            unresolvable custom validators and rules the field type ignores
        default_order: Sort key for fields that declare no order
        revalidate_siblings: Re-run every enabled control's validators after
            any value change so cross-field rules follow their sibling
        max_dependency_passes: Upper bound on dependent-field passes per
            event; None means number of dependent fields + 1
    """

    locale: str = "es"
    strict_schema: bool = False
    default_order: int = 999
    revalidate_siblings: bool = True
    max_dependency_passes: Optional[int] = None


# Global config instance (set by application)
_form_config: Optional[FormBuilderConfig] = None


def set_form_config(config: Optional[FormBuilderConfig]) -> None:
    """Set the global form builder configuration.

    Args:
        config: FormBuilderConfig instance, or None to restore defaults
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormBuilderConfig:
    """Get the current form builder configuration.

    Returns:
        Current FormBuilderConfig or default if not set
    """
    if _form_config is None:
        return FormBuilderConfig()
    return _form_config
