"""
Base generator interface for all code generation targets.

Defines the contract that language generators implement and the
error-handling wrapper used by hosts.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Mapping, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import CollectionDescriptor
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class NamingCollisionError(GeneratorError):
    """Two collections resolve to the same generated type name."""

    def __init__(self, type_name: str, first: str, second: str):
        self.type_name = type_name
        self.first = first
        self.second = second
        super().__init__(
            f"Collections '{first}' and '{second}' both map to type '{type_name}'"
        )


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = create_template_engine()
        return self._template_engine

    @abstractmethod
    def generate(self, collections: Mapping[str, CollectionDescriptor]) -> str:
        """
        Generate code for all collections.

        Args:
            collections: Ordered mapping of collection key to descriptor

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def generate_single_schema(self, collection: CollectionDescriptor) -> str:
        """
        Generate code for a single collection.

        Args:
            collection: Collection to generate code for

        Returns:
            Generated code for this collection only
        """
        pass

    def validate_schemas(self, collections: Mapping[str, CollectionDescriptor]) -> List[str]:
        """
        Validate collections for basic structural issues.

        Language generators should override this to add language-specific validation.

        Args:
            collections: Collections to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for key, collection in collections.items():
            if not collection.fields:
                warnings.append(f"Collection '{key}' has no fields")

        return warnings

    def format_code(self, code: str) -> str:
        """Trim trailing whitespace and keep at most one blank line between blocks."""
        lines = [line.rstrip() for line in code.splitlines()]
        kept = [
            line for index, line in enumerate(lines) if line or (index and lines[index - 1])
        ]
        return "\n".join(kept).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Outcome of one generation run: code, warnings and run metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Result for a run that produced no code."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, collections: Mapping[str, CollectionDescriptor]
) -> GenerationResult:
    """
    Run validation and generation, turning generator errors into a failed result.

    Other exceptions propagate.
    """
    try:
        warnings = generator.validate_schemas(collections)

        code = generator.generate(collections)

        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "collection_count": len(collections),
            "singleton_count": sum(1 for c in collections.values() if c.is_singleton),
            "field_count": sum(len(c.fields) for c in collections.values()),
            "schema_name": generator.config.schema_name,
        }

        logger.info(
            f"Generated {generator.language_name} code for {len(collections)} collections "
            f"({len(warnings)} warnings)"
        )
        return GenerationResult(formatted_code, warnings, metadata)

    except GeneratorError as e:
        logger.error(f"Code generation failed: {e}")
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
