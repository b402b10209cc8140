"""
Settlement Catalog Service - Framework-agnostic catalog build.

Runs the two build phases in order (registry first, postal codes second)
on a catalog owned by the service for one run, with progress callback
support for CLI integration.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from backend.models.settlement import Settlement, SettlementCatalog
from services.postal_code_service import PostalCodeMerger
from services.registry_loader_service import DEFAULT_REGISTRY_SHEET_NAME, SettlementRegistryLoader
from services.workbook_service import WorkbookSource

logger = logging.getLogger(__name__)


class SettlementCatalogService:
    """
    Builds the merged settlement catalog.

    A failure in either phase propagates and leaves no catalog behind:
    build() either returns the complete catalog or raises.
    """

    def __init__(
        self,
        progress_callback: Optional[Callable[[str, float, str], None]] = None,
        registry_sheet_name: str = DEFAULT_REGISTRY_SHEET_NAME
    ):
        """
        Initialize catalog service.

        Args:
            progress_callback: Optional callback for progress updates
                              Signature: callback(stage: str, percent: float, message: str)
            registry_sheet_name: Name of the settlement sheet in the registry workbook
        """
        self.progress_callback = progress_callback or (lambda *args: None)
        self.registry_sheet_name = registry_sheet_name
        self.catalog: Optional[SettlementCatalog] = None
        self.stats: Dict[str, Any] = {}

    def _emit_progress(self, stage: str, percent: float, message: str):
        """Emit progress update via callback."""
        self.progress_callback(stage, percent, message)
        logger.info(f"Progress: {stage} ({percent:.1f}%) - {message}")

    def build(self, registry_source: WorkbookSource, postal_source: WorkbookSource) -> SettlementCatalog:
        """
        Build the catalog from the registry and the postal directory.

        Args:
            registry_source: KSH settlement registry workbook
            postal_source: Magyar Posta postal directory workbook

        Returns:
            The final catalog
        """
        self.catalog = None
        self.stats = {}
        catalog = SettlementCatalog()

        self._emit_progress('registry', 0, 'Loading settlement registry...')
        loader = SettlementRegistryLoader(self.registry_sheet_name)
        loader.load(registry_source, catalog)

        self._emit_progress('postal_codes', 50, f"Merging postal codes into {len(catalog)} settlements...")
        merger = PostalCodeMerger()
        merger.merge(postal_source, catalog)

        self.stats = {
            'settlements': len(catalog),
            'postal_codes': catalog.postal_code_count(),
            'settlements_without_postal_code': sum(1 for s in catalog.settlements() if not s.postal_codes),
            **merger.stats,
        }
        self.catalog = catalog

        self._emit_progress('complete', 100,
                            f"{self.stats['settlements']} settlements, "
                            f"{self.stats['postal_codes']} postal codes")
        return catalog

    def settlements(self) -> List[Settlement]:
        """
        Settlements of the last successful build, in registry order.

        Raises:
            RuntimeError: If build() has not completed successfully
        """
        if self.catalog is None:
            raise RuntimeError("Catalog has not been built")
        return self.catalog.settlements()


def build_settlement_catalog(registry_source: WorkbookSource, postal_source: WorkbookSource,
                             registry_sheet_name: str = DEFAULT_REGISTRY_SHEET_NAME) -> SettlementCatalog:
    """Build a catalog without progress reporting."""
    service = SettlementCatalogService(registry_sheet_name=registry_sheet_name)
    return service.build(registry_source, postal_source)
