from typing import Any, Dict, Set

import jsonref  # type: ignore

from ..exceptions import ToolCallError
from ..logger import get_logger

logger = get_logger(__name__)


class SchemaValidator:
    """
    Helper class for validating and sanitizing the JSON schemas the tool server
    publishes before they are handed to a completion API.
    """

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks if the schema contains recursive references by traversing the graph.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolCallError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                if "$ref" in node:
                    ref = node["$ref"]
                    if ref in path:
                        msg = f"Recursive structure detected: {ref}. Recursive tool inputs are not supported."
                        logger.error(msg)
                        raise ToolCallError(msg)

                    # e.g. #/$defs/MyModel
                    if ref.startswith("#"):
                        parts = ref.split("/")
                        if len(parts) >= 3:
                            def_name = parts[-1]
                            if def_name in defs:
                                check(defs[def_name], path | {ref})
                    return

                for v in node.values():
                    check(v, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up a schema for better compatibility with completion APIs.
        Removes $defs, $schema, $id, title.
        Simplifies Optional fields (anyOf with null).

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        for key in ["$defs", "$schema", "$id", "title", "definitions"]:
            new_schema.pop(key, None)

        if "anyOf" in new_schema:
            any_of = new_schema["anyOf"]
            non_null = [x for x in any_of if not (isinstance(x, dict) and x.get("type") == "null")]

            if len(non_null) == 1 and isinstance(non_null[0], dict):
                # Keep the parent's description and default over the variant's
                merged = non_null[0].copy()
                for key in ("description", "default"):
                    if key in new_schema:
                        merged[key] = new_schema[key]
                return SchemaValidator.sanitize_schema(merged)

        for key, value in new_schema.items():
            if key == "properties" and isinstance(value, dict):
                new_schema[key] = {name: SchemaValidator.sanitize_schema(prop) for name, prop in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item) if isinstance(item, dict) else item for item in value
                ]

        return new_schema

    @classmethod
    def to_input_schema(cls, schema: Any) -> Dict[str, Any]:
        """Turn whatever the tool server published into a self-contained ``type: object`` schema.

        References are inlined with ``jsonref`` and the result is sanitized. A
        missing or non-object schema becomes an empty object schema.

        Args:
            schema: The raw ``inputSchema`` of an MCP tool.

        Returns:
            A dictionary usable as ``input_schema`` of a tool definition.

        Raises:
            ToolCallError: If the schema contains recursive references.
        """
        if not isinstance(schema, dict) or not schema:
            return {"type": "object", "properties": {}}

        cls.assert_no_recursive_refs(schema)
        # proxies=False ensures we get a plain dict back, not JsonRef objects
        resolved = jsonref.replace_refs(schema, proxies=False)
        sanitized = cls.sanitize_schema(resolved)

        if "properties" in sanitized and "type" not in sanitized:
            sanitized["type"] = "object"

        if sanitized.get("type") != "object":
            # bare property map
            return {"type": "object", "properties": sanitized}

        sanitized.setdefault("properties", {})
        return sanitized
