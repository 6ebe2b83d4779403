"""
Template Use Cases
"""

from .clone_template_use_case import CloneTemplateUseCase
from .create_form_from_template_use_case import CreateFormFromTemplateUseCase
from .create_template_use_case import CreateTemplateUseCase
from .delete_template_use_case import DeleteTemplateUseCase
from .dtos import (
    DeleteTemplateResponse,
    ListTemplatesResponse,
    SavedFormTemplateResponse,
    TemplateInfo,
)
from .get_template_use_case import GetTemplateUseCase
from .list_templates_use_case import ListTemplatesUseCase
from .save_form_as_template_use_case import SaveFormAsTemplateUseCase
from .update_template_use_case import UpdateTemplateUseCase

__all__ = [
    "ListTemplatesUseCase",
    "GetTemplateUseCase",
    "CreateTemplateUseCase",
    "UpdateTemplateUseCase",
    "DeleteTemplateUseCase",
    "CloneTemplateUseCase",
    "CreateFormFromTemplateUseCase",
    "SaveFormAsTemplateUseCase",
    "TemplateInfo",
    "ListTemplatesResponse",
    "DeleteTemplateResponse",
    "SavedFormTemplateResponse",
]
