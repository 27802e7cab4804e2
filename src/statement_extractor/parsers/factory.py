"""Extraction orchestrator for routing statements to provider strategies.

This module ties the extraction workflow together:
1. Detect the provider using ProviderDetector
2. Select the registered strategy (or GenericStrategy as fallback)
3. Extract the record
4. Infer the billing cycle when the strategy found no explicit period
"""

import logging

from statement_extractor.core.banks import get_provider_name
from statement_extractor.core.exceptions import UnknownProviderError
from statement_extractor.parsers.billing_cycle import infer_billing_cycle
from statement_extractor.parsers.detector import ProviderDetector
from statement_extractor.parsers.generic import GenericStrategy
from statement_extractor.parsers.refinements import (
    AxisStrategy,
    HDFCStrategy,
    ICICIStrategy,
    KotakStrategy,
    SBIStrategy,
)
from statement_extractor.schemas.internal import (
    ExtractionDiagnostics,
    ExtractionFailure,
    ExtractionResult,
    ProviderIdentity,
)

logger = logging.getLogger(__name__)


class ExtractionOrchestrator:
    """Runs detection and extraction for a statement text.

    A strategy instance is created per call, so one orchestrator can be
    shared between threads; the only state it holds is the strategy
    registry.

    Example:
        >>> orchestrator = ExtractionOrchestrator()
        >>> orchestrator.register_strategy(ProviderIdentity.HDFC, HDFCStrategy)
        >>> result = orchestrator.run(text)
        >>> print(result.provider, result.record.card_last4)
    """

    def __init__(self, detector: ProviderDetector | None = None):
        """Initialize the orchestrator.

        Args:
            detector: Provider detector instance (default: new ProviderDetector)
        """
        self.detector = detector or ProviderDetector()

        # Format: {ProviderIdentity: StrategyClass}
        self._strategies: dict[ProviderIdentity, type[GenericStrategy]] = {}

    def run(self, text: str, include_diagnostics: bool = False) -> ExtractionResult:
        """Extract a record from statement text.

        Args:
            text: Full statement text
            include_diagnostics: Attach rule and candidate details to the result

        Returns:
            ExtractionResult with the provider and the (possibly partial) record

        Raises:
            UnknownProviderError: If no provider signature matches the text
        """
        provider = self.detector.detect(text)
        if provider is ProviderIdentity.UNKNOWN:
            raise UnknownProviderError(self._unknown_provider_failure(text))

        strategy = self._get_strategy_class(provider)()
        strategy.provider = provider
        diagnostics = ExtractionDiagnostics() if include_diagnostics else None

        record = strategy.extract(text, diagnostics)

        if record.billing_cycle_start is None and record.billing_cycle_end is None:
            cycle = infer_billing_cycle(text, diagnostics)
            if cycle:
                record = record.model_copy(
                    update={"billing_cycle_start": cycle[0], "billing_cycle_end": cycle[1]}
                )
        elif diagnostics is not None:
            diagnostics.billing_cycle_source = "explicit"

        logger.debug(
            "Statement extracted",
            extra={
                "provider": provider.value,
                "strategy": type(strategy).__name__,
                "missing_fields": len(record.missing_fields()),
            },
        )

        return ExtractionResult(
            provider=provider,
            provider_name=get_provider_name(provider),
            record=record,
            diagnostics=diagnostics,
        )

    def register_strategy(
        self, provider: ProviderIdentity, strategy_class: type[GenericStrategy]
    ) -> None:
        """Register a provider-specific strategy.

        Args:
            provider: Provider identity the strategy handles
            strategy_class: Strategy class (must inherit from GenericStrategy)
        """
        if not (isinstance(strategy_class, type) and issubclass(strategy_class, GenericStrategy)):
            raise ValueError(
                f"Strategy class must inherit from GenericStrategy, got {strategy_class}"
            )

        self._strategies[ProviderIdentity(provider)] = strategy_class

    def unregister_strategy(self, provider: ProviderIdentity) -> None:
        """Remove a provider-specific strategy.

        After removal, the provider is extracted with GenericStrategy.
        """
        self._strategies.pop(ProviderIdentity(provider), None)

    def get_registered_providers(self) -> list[ProviderIdentity]:
        """Get providers with registered strategies."""
        return list(self._strategies.keys())

    def _get_strategy_class(self, provider: ProviderIdentity) -> type[GenericStrategy]:
        return self._strategies.get(provider, GenericStrategy)

    def _unknown_provider_failure(self, text: str) -> ExtractionFailure:
        found = self.detector.found_watchlist_banks(text)
        supported = ", ".join(get_provider_name(p) for p in self.detector.get_supported_providers())
        if found:
            detail = (
                f"Found bank keywords ({', '.join(found)}) but the statement layout "
                f"is not supported. Supported providers: {supported}"
            )
        else:
            detail = f"No supported bank detected. Supported providers: {supported}"
        return ExtractionFailure(detail=detail, found_keywords=found)


# Singleton orchestrator instance for global use
_orchestrator_instance: ExtractionOrchestrator | None = None


def get_orchestrator() -> ExtractionOrchestrator:
    """Get or create the global ExtractionOrchestrator instance."""
    global _orchestrator_instance
    if _orchestrator_instance is None:
        _orchestrator_instance = ExtractionOrchestrator()
        _orchestrator_instance.register_strategy(ProviderIdentity.HDFC, HDFCStrategy)
        _orchestrator_instance.register_strategy(ProviderIdentity.SBI, SBIStrategy)
        _orchestrator_instance.register_strategy(ProviderIdentity.ICICI, ICICIStrategy)
        _orchestrator_instance.register_strategy(ProviderIdentity.AXIS, AxisStrategy)
        _orchestrator_instance.register_strategy(ProviderIdentity.KOTAK, KotakStrategy)
    return _orchestrator_instance


def extract_statement(text: str, include_diagnostics: bool = False) -> ExtractionResult:
    """Convenience function to extract a statement using the global orchestrator.

    Args:
        text: Full statement text
        include_diagnostics: Attach rule and candidate details to the result

    Returns:
        ExtractionResult with the provider and record
    """
    return get_orchestrator().run(text, include_diagnostics=include_diagnostics)
