"""
Expansion passes: renaming, template evaluation, constant folding.
"""

from .base import BasePass, ExpansionContext
from .renaming import Renamer, fuse, split_indexed_name, strip_binder, is_indexed_name
from .template_eval import TemplateEvaluator, evaluate_template
from .const_folding import ConstantFolder, ConstFoldingPass, fold_constants

__all__ = [
    "BasePass", "ExpansionContext",
    "Renamer", "fuse", "split_indexed_name", "strip_binder", "is_indexed_name",
    "TemplateEvaluator", "evaluate_template",
    "ConstantFolder", "ConstFoldingPass", "fold_constants",
]
