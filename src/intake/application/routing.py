"""
Routing Engine
==============

Turns a submission into a (category, agency) decision.

The resolver walks an ordered list of strategies and stops at the first one
that produces a decision:

1. explicit_category - the category the citizen picked
2. classified_category - the category the keyword classifier chose
3. default_category - the catch-all "General" category

A strategy only accepts a category that exists and has an agency. Lookup
failures are logged and treated as a miss: intake must keep working even
when the taxonomy is misconfigured.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence

from src.config import RoutingStrategy, settings
from src.core import RepositoryException
from src.intake.application.interfaces import ICategoryRepository
from src.intake.domain import Category, KeywordClassifier, RoutingDecision
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """Inputs available to every resolution strategy."""
    explicit_category_id: Optional[int] = None
    classified_name: Optional[str] = None
    default_category_name: str = "General"


ResolutionStrategy = Callable[
    [ResolutionContext, ICategoryRepository],
    Awaitable[Optional[RoutingDecision]]
]


def _accept(category: Optional[Category], strategy: str, lookup: str) -> Optional[RoutingDecision]:
    if category is None:
        logger.info("Category not found", extra={"strategy": strategy, "lookup": lookup})
        return None
    if not category.is_routable:
        logger.warning(
            "Category has no agency",
            extra={"strategy": strategy, "category_id": category.id, "category_name": category.name}
        )
        return None
    return RoutingDecision.from_category(category, strategy)


async def explicit_category(
    context: ResolutionContext,
    categories: ICategoryRepository
) -> Optional[RoutingDecision]:
    if context.explicit_category_id is None:
        return None
    try:
        category = await categories.find_by_id(context.explicit_category_id)
    except RepositoryException as e:
        logger.error(
            "Explicit category lookup failed",
            extra={"category_id": context.explicit_category_id, "error": e.message}
        )
        return None
    return _accept(category, RoutingStrategy.EXPLICIT, str(context.explicit_category_id))


async def classified_category(
    context: ResolutionContext,
    categories: ICategoryRepository
) -> Optional[RoutingDecision]:
    if not context.classified_name:
        return None
    try:
        category = await categories.find_by_name(context.classified_name)
    except RepositoryException as e:
        logger.error(
            "Classified category lookup failed",
            extra={"category_name": context.classified_name, "error": e.message}
        )
        return None
    return _accept(category, RoutingStrategy.CLASSIFIED, context.classified_name)


async def default_category(
    context: ResolutionContext,
    categories: ICategoryRepository
) -> Optional[RoutingDecision]:
    try:
        category = await categories.find_by_name(context.default_category_name)
    except RepositoryException as e:
        logger.error(
            "Default category lookup failed",
            extra={"category_name": context.default_category_name, "error": e.message}
        )
        return None
    return _accept(category, RoutingStrategy.DEFAULT, context.default_category_name)


DEFAULT_STRATEGIES: Sequence[ResolutionStrategy] = (
    explicit_category,
    classified_category,
    default_category,
)


class CategoryResolver:
    """
    Evaluates resolution strategies in order, short-circuiting on success.
    """

    def __init__(
        self,
        categories: ICategoryRepository,
        strategies: Sequence[ResolutionStrategy] = DEFAULT_STRATEGIES,
        default_category_name: Optional[str] = None,
    ):
        self._categories = categories
        self._strategies: List[ResolutionStrategy] = list(strategies)
        self._default_category_name = default_category_name or settings.default_category_name

    async def resolve(
        self,
        explicit_category_id: Optional[int] = None,
        classified_name: Optional[str] = None,
    ) -> Optional[RoutingDecision]:
        """
        Run the full fallback chain.

        Returns:
            RoutingDecision, or None when every strategy missed
        """
        context = ResolutionContext(
            explicit_category_id=explicit_category_id,
            classified_name=classified_name,
            default_category_name=self._default_category_name,
        )
        return await self._run(self._strategies, context)

    async def resolve_explicit(self, category_id: int) -> Optional[RoutingDecision]:
        """Try only the citizen's own choice, without any fallback."""
        context = ResolutionContext(
            explicit_category_id=category_id,
            default_category_name=self._default_category_name,
        )
        return await self._run([explicit_category], context)

    async def _run(
        self,
        strategies: Sequence[ResolutionStrategy],
        context: ResolutionContext
    ) -> Optional[RoutingDecision]:
        for strategy in strategies:
            decision = await strategy(context, self._categories)
            if decision is not None:
                return decision
        return None


class RoutingOrchestrator:
    """
    End-to-end routing decision for a new submission.

    An explicit category that resolves wins outright and the classifier is
    never consulted. Otherwise the description is classified and the
    resolver falls back from the classified name to the default category.
    """

    def __init__(self, classifier: KeywordClassifier, resolver: CategoryResolver):
        self._classifier = classifier
        self._resolver = resolver

    async def route(
        self,
        description: str,
        language_preference: Optional[str] = None,
        explicit_category_id: Optional[int] = None,
    ) -> Optional[RoutingDecision]:
        if explicit_category_id is not None:
            decision = await self._resolver.resolve_explicit(explicit_category_id)
            if decision is not None:
                return decision
            logger.info(
                "Explicit category unusable, falling back to classification",
                extra={"category_id": explicit_category_id}
            )

        classified_name = self._classifier.classify(description, language_preference)
        logger.debug(
            "Description classified",
            extra={
                "language": self._classifier.resolve_language(language_preference),
                "category_name": classified_name
            }
        )

        decision = await self._resolver.resolve(classified_name=classified_name)
        if decision is None:
            logger.error(
                "No category resolved, submission will be stored unrouted",
                extra={"classified_name": classified_name}
            )
        return decision
