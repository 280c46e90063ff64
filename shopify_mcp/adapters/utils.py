"""Shared utilities for MCP adapters"""

from typing import Any, Dict, Type, TypeVar

from ..data_models.tool_inputs import ToolInput

ModelT = TypeVar("ModelT", bound=ToolInput)


def validate_params(model: Type[ModelT], params: Dict[str, Any]) -> ModelT:
    """
    Build a tool input model from raw tool parameters

    Parameters left as None are treated as not given so model
    defaults apply. Raises pydantic.ValidationError on bad input.
    """
    return model.model_validate({k: v for k, v in params.items() if v is not None})
