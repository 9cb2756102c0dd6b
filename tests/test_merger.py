# ABOUTME: Tests for the idempotent server merge
# ABOUTME: Covers every schema variant, idempotency and non-destructiveness
import pytest

from clix_skills.document import ConfigDocument
from clix_skills.errors import ConfigShapeError
from clix_skills.merger import VARIANTS, empty_document, is_registered, merge, project_entry
from clix_skills.models import (
    CLIX_SERVER_ENTRY,
    REGISTRATION_KEY,
    ConfigFormat,
    SchemaVariant,
    ServerEntry,
)

CLIX_ARGS = ["-y", "@clix-so/clix-mcp-server@latest"]


class TestProjection:
    """Tests for per-variant entry shapes."""

    @pytest.mark.parametrize(
        "variant",
        [
            SchemaVariant.STANDARD_MCP_SERVERS,
            SchemaVariant.AMP_NAMESPACED,
            SchemaVariant.CODEX_TABLE,
        ],
    )
    def test_command_args_shape(self, variant):
        """Test mapping variants store command and args."""
        assert project_entry(variant) == {"command": "npx", "args": CLIX_ARGS}

    def test_opencode_shape(self):
        """Test OpenCode flattens command and args and adds type/enabled."""
        assert project_entry(SchemaVariant.OPENCODE_MAP) == {
            "type": "local",
            "command": ["npx", *CLIX_ARGS],
            "enabled": True,
        }

    def test_env_included_when_present(self):
        """Test env overrides are written only when non-empty."""
        entry = ServerEntry(command="node", args=["s.js"], env={"TOKEN": "x"})

        assert project_entry(SchemaVariant.STANDARD_MCP_SERVERS, entry)["env"] == {"TOKEN": "x"}
        assert project_entry(SchemaVariant.OPENCODE_MAP, entry)["environment"] == {"TOKEN": "x"}

    def test_projection_returns_fresh_lists(self):
        """Test callers can't mutate the canonical entry through a projection."""
        projected = project_entry(SchemaVariant.CODEX_TABLE)
        projected["args"].append("--extra")

        assert CLIX_SERVER_ENTRY.args == tuple(CLIX_ARGS)


class TestEmptyDocument:
    """Tests for new-file templates."""

    def test_templates(self):
        """Test each variant's template holds an empty collection."""
        assert empty_document(SchemaVariant.STANDARD_MCP_SERVERS).data == {"mcpServers": {}}
        assert empty_document(SchemaVariant.AMP_NAMESPACED).data == {"amp.mcpServers": {}}
        assert empty_document(SchemaVariant.CODEX_TABLE).data == {"mcp_servers": {}}
        assert empty_document(SchemaVariant.OPENCODE_MAP).data == {
            "$schema": "https://opencode.ai/config.json",
            "mcp": {},
        }

    def test_template_formats(self):
        """Test only Codex is TOML."""
        assert empty_document(SchemaVariant.CODEX_TABLE).format is ConfigFormat.TOML
        assert empty_document(SchemaVariant.OPENCODE_MAP).format is ConfigFormat.JSON

    def test_templates_are_independent(self):
        """Test two templates never share state."""
        first = empty_document(SchemaVariant.STANDARD_MCP_SERVERS)
        first.data["mcpServers"]["x"] = {}

        assert empty_document(SchemaVariant.STANDARD_MCP_SERVERS).data == {"mcpServers": {}}

    def test_every_variant_described(self):
        """Test the variant table is complete."""
        assert set(VARIANTS) == set(SchemaVariant)


class TestMerge:
    """Tests for merge()."""

    def test_injects_into_empty_document(self):
        """Test the entry is added under the registration key."""
        result = merge(empty_document(SchemaVariant.CODEX_TABLE), SchemaVariant.CODEX_TABLE)

        assert result.already_present is False
        assert result.document.data == {
            "mcp_servers": {REGISTRATION_KEY: {"command": "npx", "args": CLIX_ARGS}}
        }

    def test_creates_missing_collection(self):
        """Test the collection is appended after existing keys when absent."""
        doc = ConfigDocument(ConfigFormat.JSON, {"theme": "dark"})

        result = merge(doc, SchemaVariant.STANDARD_MCP_SERVERS)

        assert list(result.document.data) == ["theme", "mcpServers"]
        assert REGISTRATION_KEY in result.document.data["mcpServers"]

    def test_preserves_existing_servers(self):
        """Test a different server under the same collection is untouched."""
        doc = ConfigDocument(
            ConfigFormat.JSON,
            {"mcpServers": {"other-server": {"command": "foo"}}, "extra": [1, {"a": None}]},
        )

        result = merge(doc, SchemaVariant.STANDARD_MCP_SERVERS)

        servers = result.document.data["mcpServers"]
        assert list(servers) == ["other-server", REGISTRATION_KEY]
        assert servers["other-server"] == {"command": "foo"}
        assert result.document.data["extra"] == [1, {"a": None}]

    def test_does_not_mutate_input(self):
        """Test the caller's document is left as it was."""
        doc = ConfigDocument(ConfigFormat.JSON, {"mcpServers": {}})

        merge(doc, SchemaVariant.STANDARD_MCP_SERVERS)

        assert doc.data == {"mcpServers": {}}

    def test_already_present_is_noop(self):
        """Test an existing registration is not compared or replaced."""
        doc = ConfigDocument(
            ConfigFormat.JSON,
            {"mcpServers": {REGISTRATION_KEY: {"command": "custom"}}},
        )

        result = merge(doc, SchemaVariant.STANDARD_MCP_SERVERS)

        assert result.already_present is True
        assert result.document is doc
        assert doc.data["mcpServers"][REGISTRATION_KEY] == {"command": "custom"}

    def test_merge_is_idempotent(self):
        """Test merging the result again changes nothing."""
        first = merge(empty_document(SchemaVariant.OPENCODE_MAP), SchemaVariant.OPENCODE_MAP)
        second = merge(first.document, SchemaVariant.OPENCODE_MAP)

        assert second.already_present is True
        assert second.document.data == first.document.data

    def test_amp_uses_literal_dotted_key(self):
        """Test Amp registration lands under "amp.mcpServers", not amp -> mcpServers."""
        doc = ConfigDocument(ConfigFormat.JSON, {"amp": {"mcpServers": {REGISTRATION_KEY: {}}}})

        assert is_registered(doc, SchemaVariant.AMP_NAMESPACED) is False

        result = merge(doc, SchemaVariant.AMP_NAMESPACED)

        assert result.already_present is False
        assert result.document.data["amp"] == {"mcpServers": {REGISTRATION_KEY: {}}}
        assert REGISTRATION_KEY in result.document.data["amp.mcpServers"]

    def test_opencode_keeps_schema_and_other_servers(self):
        """Test OpenCode merge preserves $schema and local servers."""
        doc = ConfigDocument(
            ConfigFormat.JSON,
            {
                "$schema": "https://opencode.ai/config.json",
                "mcp": {"local": {"type": "local", "command": ["x"], "enabled": False}},
            },
        )

        result = merge(doc, SchemaVariant.OPENCODE_MAP)

        assert result.document.data["$schema"] == "https://opencode.ai/config.json"
        assert result.document.data["mcp"]["local"]["enabled"] is False
        assert result.document.data["mcp"][REGISTRATION_KEY]["enabled"] is True

    def test_non_mapping_collection(self):
        """Test a collection that isn't a mapping can't be merged into."""
        doc = ConfigDocument(ConfigFormat.JSON, {"mcpServers": ["not", "a", "map"]})

        with pytest.raises(ConfigShapeError):
            merge(doc, SchemaVariant.STANDARD_MCP_SERVERS)

    def test_null_collection_is_replaced(self):
        """Test a null collection is filled in rather than rejected."""
        doc = ConfigDocument(ConfigFormat.JSON, {"$schema": "x", "mcp": None})

        result = merge(doc, SchemaVariant.OPENCODE_MAP)

        assert result.already_present is False
        assert list(result.document.data["mcp"]) == [REGISTRATION_KEY]
        assert result.document.data["$schema"] == "x"
        assert doc.data["mcp"] is None

    def test_custom_entry_and_key(self):
        """Test another server can be registered under another key."""
        entry = ServerEntry(command="uvx", args=["demo-server"])
        result = merge(
            empty_document(SchemaVariant.STANDARD_MCP_SERVERS),
            SchemaVariant.STANDARD_MCP_SERVERS,
            entry,
            key="demo",
        )

        assert result.document.data == {"mcpServers": {"demo": {"command": "uvx", "args": ["demo-server"]}}}
