"""
Tests for the tool layer: script generation and bridge delegation
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from ppro_bridge.bridge.file_bridge import FileBridge
from ppro_bridge.tools.base import ToolError
from ppro_bridge.tools.registry import BUILTIN_TOOLS, ToolRegistry, build_tool_registry


@pytest.fixture
def mocked_bridge(bridge_config):
    bridge = FileBridge(bridge_config)
    bridge.send_command = AsyncMock(return_value={"success": True, "data": {}})
    return bridge


@pytest.fixture
def registry(mocked_bridge):
    return build_tool_registry(mocked_bridge)


def sent(bridge):
    """(script, config, validate) of the single bridge call."""
    bridge.send_command.assert_awaited_once()
    args, kwargs = bridge.send_command.call_args
    return args[0], args[1], kwargs["validate"]


class TestRegistry:

    def test_registers_builtin_tools(self, registry):
        assert registry.get_tool_names() == [t.get_metadata()["name"] for t in BUILTIN_TOOLS]
        assert registry.tool_exists("ping")
        assert registry.get_tool("missing") is None

    def test_tools_are_bound_to_the_registry_bridge(self, registry, mocked_bridge):
        assert registry.get_tool("ping").bridge is mocked_bridge

    def test_duplicate_registration_rejected(self, registry):
        with pytest.raises(ValueError, match="already registered"):
            registry.register_tool(BUILTIN_TOOLS[0])

    def test_tools_by_category(self, registry):
        assert sorted(registry.get_tools_by_category("scripting")) == [
            "evaluate_expression",
            "execute_extendscript",
        ]

    def test_search_by_name_and_description(self, registry):
        assert "export_frame" in registry.search_tools("image")
        assert registry.search_tools("save_project") == ["save_project", "save_project_as"]

    def test_schema_includes_input_schema(self, registry):
        schema = registry.get_tool_schema("save_project_as")

        assert schema["name"] == "save_project_as"
        assert schema["raw"] is False
        assert schema["input_schema"]["required"] == ["path"]

    def test_schema_for_unknown_tool(self, registry):
        assert registry.get_tool_schema("nope") is None

    def test_all_schemas(self, registry):
        assert set(registry.get_all_schemas()) == set(registry.get_tool_names())

    def test_separate_registries_use_separate_bridges(self, tmp_path):
        from ppro_bridge.bridge.schemas import BridgeConfig

        a = ToolRegistry(FileBridge(BridgeConfig(directory=tmp_path / "a")))
        b = ToolRegistry(FileBridge(BridgeConfig(directory=tmp_path / "b")))
        a.register_tools(BUILTIN_TOOLS)
        b.register_tools(BUILTIN_TOOLS)

        assert a.get_tool("ping").bridge is not b.get_tool("ping").bridge


class TestTools:

    @pytest.mark.asyncio
    async def test_ping_uses_short_timeout(self, registry, mocked_bridge):
        result = await registry.get_tool("ping").ainvoke({})

        script, config, validate = sent(mocked_bridge)
        assert result == {"success": True, "data": {}}
        assert "connected: true" in script
        assert config.timeout_ms == 5000
        assert validate is True

    @pytest.mark.asyncio
    async def test_get_project_info_uses_default_timeout(self, registry, mocked_bridge, bridge_config):
        await registry.get_tool("get_project_info").ainvoke({})

        script, config, validate = sent(mocked_bridge)
        assert "project.sequences.numSequences" in script
        assert config.timeout_ms == bridge_config.timeout_ms

    @pytest.mark.asyncio
    async def test_save_project_as_escapes_path(self, registry, mocked_bridge):
        await registry.get_tool("save_project_as").ainvoke({"path": 'C:\\Projects\\My "Cut".prproj'})

        script, _, _ = sent(mocked_bridge)
        assert 'project.saveAs("C:\\\\Projects\\\\My \\"Cut\\".prproj");' in script

    @pytest.mark.asyncio
    async def test_export_frame_uses_long_timeout_and_seeks(self, registry, mocked_bridge):
        await registry.get_tool("export_frame").ainvoke({"output_path": "/tmp/f.png", "time_seconds": 2.5})

        script, config, _ = sent(mocked_bridge)
        assert config.timeout_ms == 120000
        assert "seq.setPlayerPosition(__secondsToTicks(2.5).toString());" in script
        assert 'var outputPath = "/tmp/f.png";' in script

    @pytest.mark.asyncio
    async def test_export_frame_without_time_keeps_playhead(self, registry, mocked_bridge):
        await registry.get_tool("export_frame").ainvoke({"output_path": "/tmp/f.png"})

        script, _, _ = sent(mocked_bridge)
        assert "setPlayerPosition" not in script

    @pytest.mark.asyncio
    async def test_execute_extendscript_uses_raw_path(self, registry, mocked_bridge):
        await registry.get_tool("execute_extendscript").ainvoke(
            {"code": 'return __result(eval("1+1"));', "timeout_ms": 60000}
        )

        script, config, validate = sent(mocked_bridge)
        assert 'return __result(eval("1+1"));' in script
        assert validate is False
        assert config.timeout_ms == 60000

    @pytest.mark.asyncio
    async def test_evaluate_expression_wraps_expression(self, registry, mocked_bridge):
        await registry.get_tool("evaluate_expression").ainvoke({"expression": "app.project.name"})

        script, _, validate = sent(mocked_bridge)
        assert "var val = app.project.name;" in script
        assert validate is False

    def test_tools_are_async_only(self, registry):
        with pytest.raises(NotImplementedError):
            registry.get_tool("ping")._run()


class TestExecute:
    """PremiereTool.execute turns refusals into ToolError"""

    @pytest.mark.asyncio
    async def test_blocked_pattern_in_argument_is_a_validation_error(self, bridge_config):
        registry = build_tool_registry(FileBridge(bridge_config))

        result = await registry.get_tool("save_project_as").execute(path='x"); eval("alert(1)')

        assert isinstance(result, ToolError)
        assert result.error_type == "validation"
        assert "blocked pattern" in result.error_message
        assert result.retryable is False
        assert "execute_extendscript" in result.suggested_fix

    @pytest.mark.asyncio
    async def test_oversized_script_is_a_validation_error(self, bridge_config):
        registry = build_tool_registry(FileBridge(bridge_config))

        result = await registry.get_tool("execute_extendscript").execute(code="x" * (501 * 1024))

        assert isinstance(result, ToolError)
        assert "500KB size limit" in result.error_message
        assert result.suggested_fix == "Split the work into smaller scripts"

    @pytest.mark.asyncio
    async def test_missing_argument_is_a_validation_error(self, registry, mocked_bridge):
        result = await registry.get_tool("save_project_as").execute()

        assert isinstance(result, ToolError)
        assert result.error_type == "validation"
        mocked_bridge.send_command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_end_to_end_through_the_directory(self, bridge, host):
        registry = build_tool_registry(bridge)
        host_task = asyncio.create_task(
            host.serve(payload=lambda cid, script: {"success": True, "data": {"connected": True}})
        )

        result = await registry.get_tool("ping").execute()
        await host_task

        assert result == {"success": True, "data": {"connected": True}}
