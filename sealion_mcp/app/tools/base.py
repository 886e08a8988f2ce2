"""Tool contract shared by every Sea-lion tool.

A tool pairs a pydantic input model (used to validate arguments) with a
static tuple of :class:`ParamSpec` entries (used to describe the input to MCP
clients). The JSON-Schema description is built once from the specs when the
tool is constructed, through a fixed kind → fragment table; nothing
inspects the pydantic model at listing time.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Mapping, Optional

from pydantic import BaseModel, ValidationError

from sealion_mcp.app.core.logging import get_log_context, get_logger
from sealion_mcp.app.exceptions import InvalidParamsError, SeaLionMCPError, ToolExecutionError
from sealion_mcp.app.providers.base import BaseProvider

logger = get_logger(__name__)


class ToolKind(str, Enum):
    """Closed set of tool variants served by this process."""
    TEXT_GENERATION = "text_generation"
    TRANSLATION = "translation"
    CULTURAL_ANALYSIS = "cultural_analysis"


class ParamKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"


# Base JSON-Schema fragment per parameter kind
_KIND_FRAGMENTS: dict[ParamKind, dict[str, Any]] = {
    ParamKind.STRING: {"type": "string"},
    ParamKind.INTEGER: {"type": "integer"},
    ParamKind.NUMBER: {"type": "number"},
    ParamKind.BOOLEAN: {"type": "boolean"},
    ParamKind.ENUM: {"type": "string"},
}

# ParamSpec attribute → JSON-Schema keyword
_CONSTRAINT_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
)

_NO_DEFAULT = object()


@dataclass(frozen=True)
class ParamSpec:
    """Declarative description of one tool argument."""
    name: str
    kind: ParamKind
    description: Optional[str] = None
    required: bool = False
    default: Any = _NO_DEFAULT
    choices: tuple[str, ...] = ()
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @property
    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT

    def to_json_schema(self) -> dict[str, Any]:
        fragment = dict(_KIND_FRAGMENTS[self.kind])
        if self.kind is ParamKind.ENUM:
            fragment["enum"] = list(self.choices)
        for attr, keyword in _CONSTRAINT_KEYWORDS:
            value = getattr(self, attr)
            if value is not None:
                fragment[keyword] = value
        if self.has_default:
            fragment["default"] = self.default
        if self.description:
            fragment["description"] = self.description
        return fragment


def build_input_schema(params: tuple[ParamSpec, ...]) -> dict[str, Any]:
    """Render parameter specs as an object JSON-Schema with no extra keys."""
    schema: dict[str, Any] = {
        "type": "object",
        "properties": {param.name: param.to_json_schema() for param in params},
    }
    required = [param.name for param in params if param.required]
    if required:
        schema["required"] = required
    schema["additionalProperties"] = False
    return schema


class BaseTool(ABC):
    """Base class for tools.

    Subclasses declare ``name``, ``kind``, ``label``, ``description``,
    ``input_model`` and ``params``, and implement :meth:`execute`.
    Instances are built once at startup and never mutated.
    """

    name: ClassVar[str]
    kind: ClassVar[ToolKind]
    label: ClassVar[str]
    description: ClassVar[str]
    input_model: ClassVar[type[BaseModel]]
    params: ClassVar[tuple[ParamSpec, ...]]

    def __init__(self) -> None:
        self.input_schema = build_input_schema(self.params)

    def describe(self) -> dict[str, Any]:
        """Tool descriptor as returned by the listing operation."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    def validate(self, arguments: Mapping[str, Any]) -> BaseModel:
        """Validate raw arguments against the input model.

        Raises:
            InvalidParamsError: Listing every offending field
        """
        try:
            return self.input_model.model_validate(dict(arguments))
        except ValidationError as e:
            raise InvalidParamsError.from_validation_error(e) from e

    def bind(self, values: Mapping[str, Any]) -> BaseModel:
        """Wrap already-validated (and sanitized) values without re-validating."""
        return self.input_model.model_construct(**values)

    async def run(self, args: BaseModel, client: BaseProvider) -> str:
        """Execute the tool and return its text, trimmed.

        Raises:
            ToolExecutionError: Wrapping whatever made the tool fail
        """
        logger.info(
            f"Starting {self.label.lower()}",
            extra=get_log_context(
                tool=self.name, model=getattr(args, "model", None), kind=self.kind.value
            ),
        )
        try:
            result = await self.execute(args, client)
        except SeaLionMCPError as e:
            logger.error(f"{self.label} failed: {e.message}", extra=get_log_context(tool=self.name))
            raise ToolExecutionError(self.name, f"{self.label} failed: {e.message}", cause=e) from e
        except Exception as e:
            logger.exception(f"{self.label} failed", extra=get_log_context(tool=self.name))
            raise ToolExecutionError(self.name, f"{self.label} failed: {e}", cause=e) from e

        logger.info(f"{self.label} completed successfully", extra=get_log_context(tool=self.name))
        return result.strip()

    @abstractmethod
    async def execute(self, args: Any, client: BaseProvider) -> str:
        """Build the upstream request from ``args`` and call ``client`` once."""
        pass
