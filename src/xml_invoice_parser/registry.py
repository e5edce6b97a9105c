"""
Format registry: the ordered set of format modules used for detection.

Detection is first-match in registration order. Ambiguous documents whose
signature fits several modules go to the earliest registered one; there is
no scoring and no uniqueness check.

Every module is checked for completeness when it is registered, so a
registry holding a module that cannot produce all canonical keys can never
be constructed.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Type

from xml_invoice_parser.config import get_formats_config
from xml_invoice_parser.exceptions import (
    IncompleteImplementationError,
    UnknownFormatModuleError,
)
from xml_invoice_parser.formats import FORMAT_MODULES, FormatModule


logger = logging.getLogger(__name__)


def check_completeness(module: Type[FormatModule]) -> None:
    """
    Verify a module declares extraction for every canonical key.

    Args:
        module: FormatModule subclass to verify

    Raises:
        IncompleteImplementationError: If the module's declared capability
            misses canonical metadata or item keys
    """
    missing_metadata = module.metadata_keys() - module.declared_metadata_capability()
    missing_items = module.item_keys() - module.declared_item_capability()

    if missing_metadata or missing_items:
        raise IncompleteImplementationError(
            module.__name__,
            missing_metadata_keys=missing_metadata,
            missing_item_keys=missing_items
        )


class FormatRegistry:
    """
    Ordered, immutable collection of FormatModule classes.

    Args:
        modules: FormatModule subclasses in detection order

    Raises:
        ValueError: If modules is empty or contains duplicates
        IncompleteImplementationError: If any module is incomplete

    Example:
        >>> registry = FormatRegistry([CrossIndustryInvoiceFormat, UBLFormat])
        >>> registry.detect(tree)
        <class 'xml_invoice_parser.formats.ubl.UBLFormat'>
    """

    def __init__(self, modules: Sequence[Type[FormatModule]]):
        modules = tuple(modules)
        if not modules:
            raise ValueError("FormatRegistry needs at least one format module")
        if len(set(modules)) != len(modules):
            raise ValueError(
                f"Duplicate format modules: {[m.__name__ for m in modules]}"
            )

        for module in modules:
            check_completeness(module)

        self._modules: Tuple[Type[FormatModule], ...] = modules

    @classmethod
    def from_identifiers(cls, format_ids: Iterable[str]) -> 'FormatRegistry':
        """
        Build a registry from format identifiers.

        Raises:
            UnknownFormatModuleError: If an identifier is not in FORMAT_MODULES
        """
        modules = []
        for format_id in format_ids:
            if format_id not in FORMAT_MODULES:
                raise UnknownFormatModuleError(format_id, FORMAT_MODULES.keys())
            modules.append(FORMAT_MODULES[format_id])
        return cls(modules)

    def all_modules(self) -> Tuple[Type[FormatModule], ...]:
        """Return the registered modules in detection order."""
        return self._modules

    def detect(self, tree: Any) -> Optional[Type[FormatModule]]:
        """
        Return the first module whose signature matches tree, or None.
        """
        for module in self._modules:
            if module.check_signature(tree):
                logger.debug(f"Detected format: {module.format_id}")
                return module
        return None

    def supported(self) -> List[str]:
        """Descriptions of all registered dialects, in detection order."""
        return [module.supported() for module in self._modules]

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self):
        return iter(self._modules)

    def __repr__(self) -> str:
        ids = ', '.join(module.format_id or module.__name__ for module in self._modules)
        return f"FormatRegistry([{ids}])"


# Singleton pattern - built once from formats.yaml, shared read-only
_default_registry: Optional[FormatRegistry] = None


def get_default_registry() -> FormatRegistry:
    """
    Get the registry configured in formats.yaml (lazy-loaded singleton).

    Example:
        >>> registry = get_default_registry()
        >>> [m.format_id for m in registry.all_modules()]
        ['cross_industry_document', 'cross_industry_invoice', 'ubl']
    """
    global _default_registry
    if _default_registry is None:
        format_ids = get_formats_config().format_modules
        _default_registry = FormatRegistry.from_identifiers(format_ids)
        logger.debug(f"Loaded {_default_registry!r}")
    return _default_registry
