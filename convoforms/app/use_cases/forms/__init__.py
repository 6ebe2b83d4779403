"""
Form Use Cases
"""

from .create_form_use_case import CreateFormUseCase
from .delete_form_use_case import DeleteFormUseCase
from .dtos import DeleteFormResponse, FormInfo, ListFormsResponse
from .list_forms_use_case import GetFormUseCase, ListFormsUseCase
from .publish_form_use_case import PublishFormUseCase
from .update_form_use_case import UpdateFormUseCase

__all__ = [
    "ListFormsUseCase",
    "GetFormUseCase",
    "CreateFormUseCase",
    "UpdateFormUseCase",
    "DeleteFormUseCase",
    "PublishFormUseCase",
    "FormInfo",
    "ListFormsResponse",
    "DeleteFormResponse",
]
