"""Name-keyed tool registry: advertised schemas plus argument decoding and dispatch."""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from coding_agent.errors import ArgumentDecodeError, DuplicateToolError, UnknownToolError


# JSON-schema primitive name -> accepted Python types.
_JSON_TYPES = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list,),
}

Executor = Callable[..., str]


@dataclass(frozen = True)
class ToolField:
    """One named argument of a tool."""

    name: str
    type: str
    description: str
    required: bool = True


@dataclass(frozen = True)
class ToolDescriptor:
    """Name, description and argument schema advertised to the model."""

    name: str
    description: str
    fields: Tuple[ToolField, ...] = ()

    def to_openai_tool(self) -> Dict[str, Any]:
        """Render in the OpenAI function-calling format."""
        properties = {
            tool_field.name: {
                "type": tool_field.type,
                "description": tool_field.description,
            }
            for tool_field in self.fields
        }
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": properties,
                    "required": [tool_field.name for tool_field in self.fields if tool_field.required],
                },
            },
        }

    def decode(self, arguments_json: str) -> Dict[str, Any]:
        """
        Decode a raw arguments payload into keyword arguments for the executor.

        Fields not declared in the schema are dropped.

        Raises:
            ArgumentDecodeError: The payload is not a JSON object, a required field
                is missing, or a field has the wrong type.
        """
        if arguments_json is None or not arguments_json.strip():
            payload: Any = {}
        else:
            try:
                payload = json.loads(arguments_json)
            except ValueError as exc:
                raise ArgumentDecodeError(self.name, f"malformed JSON ({exc})") from exc

        if not isinstance(payload, dict):
            raise ArgumentDecodeError(self.name, f"expected a JSON object, got {type(payload).__name__}")

        decoded = {}
        for tool_field in self.fields:
            if tool_field.name not in payload:
                if tool_field.required:
                    raise ArgumentDecodeError(self.name, f"missing required field '{tool_field.name}'")
                continue

            value = payload[tool_field.name]
            if not _matches_type(value, tool_field.type):
                raise ArgumentDecodeError(
                    self.name,
                    f"field '{tool_field.name}' must be of type {tool_field.type}",
                )
            decoded[tool_field.name] = value
        return decoded


def _matches_type(value: Any, type_name: str) -> bool:
    accepted = _JSON_TYPES.get(type_name)
    if accepted is None:
        return True
    # bool is a subclass of int in Python but not a JSON number.
    if isinstance(value, bool) and type_name != "boolean":
        return False
    return isinstance(value, accepted)


class ToolRegistry:
    """Maps tool names to ``(descriptor, executor)`` entries."""

    def __init__(self):
        self._entries: Dict[str, Tuple[ToolDescriptor, Executor]] = {}

    def register(self, descriptor: ToolDescriptor, executor: Executor) -> None:
        if descriptor.name in self._entries:
            raise DuplicateToolError(f"Tool already registered: {descriptor.name}")
        self._entries[descriptor.name] = (descriptor, executor)

    def dispatch(self, name: str, arguments_json: str) -> str:
        """
        Decode the arguments and run the named tool.

        Returns the executor's text result unchanged.

        Raises:
            UnknownToolError: ``name`` was never registered.
            ArgumentDecodeError: The arguments do not fit the tool's schema.
        """
        entry = self._entries.get(name)
        if entry is None:
            raise UnknownToolError(name)

        descriptor, executor = entry
        kwargs = descriptor.decode(arguments_json)
        return executor(**kwargs)

    def descriptors(self) -> List[ToolDescriptor]:
        return [descriptor for descriptor, _ in self._entries.values()]

    def tool_schemas(self) -> Tuple[Dict[str, Any], ...]:
        return tuple(descriptor.to_openai_tool() for descriptor in self.descriptors())

    def names(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
