"""Tests for the command dictionary normalizer and prefix tree."""

from __future__ import annotations

import pytest

from aoshelper.core.exceptions import NormalizationError, TreeFrozenError
from aoshelper.core.normalizer import Normalizer, Shape, build_index, detect_shape, tokenize
from aoshelper.core.tree import PrefixNode
from aoshelper.models.command import CommandDetail


def _walk(root: PrefixNode, command: str) -> PrefixNode | None:
    return root.resolve(command.split())


class TestTokenize:
    def test_lowercases_and_splits(self):
        assert tokenize("  Show IP\tInterface ") == ["show", "ip", "interface"]

    def test_blank(self):
        assert tokenize("   ") == []


class TestDetectShape:
    def test_flat(self, sample_commands):
        assert detect_shape(sample_commands) is Shape.FLAT

    def test_records(self):
        assert detect_shape([{"command": "show vlan"}]) is Shape.RECORDS

    def test_nested(self):
        assert detect_shape({"show": {"vlan": "Displays VLANs."}}) is Shape.NESTED

    def test_options_key_means_nested(self):
        assert detect_shape({"debug": "x", "_options": ["on"]}) is Shape.NESTED

    def test_string_field_beside_detail_field_means_nested(self):
        assert detect_shape({"interfaces": {"description": "Set alias", "speed": "Set speed"}}) is Shape.NESTED

    def test_unknown_non_string_field_stays_flat(self):
        assert detect_shape({"show vlan": {"description": "x", "vendor_ext": {"a": "b"}}}) is Shape.FLAT

    def test_none_value_is_flat(self):
        assert detect_shape({"ping": None, "show vlan": "x"}) is Shape.FLAT

    def test_not_a_container(self):
        with pytest.raises(NormalizationError, match="mapping or a list"):
            detect_shape("show vlan")


class TestFlatShape:
    def test_every_command_reaches_metadata(self, root, sample_commands):
        for command in sample_commands:
            node = _walk(root, command)
            assert node is not None
            assert node.metadata is not None

    def test_metadata_is_command_detail(self, root):
        node = _walk(root, "show ip interface")
        assert isinstance(node.metadata, CommandDetail)
        assert node.metadata.description == "D1"
        assert node.metadata.syntax == "show ip interface [name]"

    def test_string_value_is_description(self, root):
        assert _walk(root, "show ip").metadata.description == "Displays IP settings."

    def test_node_can_be_complete_and_have_children(self, root):
        node = _walk(root, "show ip")
        assert node.is_complete
        assert set(node.children) == {"interface", "isis"}

    def test_intermediate_nodes_have_no_metadata(self, root):
        assert _walk(root, "show").metadata is None
        assert _walk(root, "show ip isis").metadata is None

    def test_keys_are_lowercased(self):
        root = build_index({"SHOW Vlan Members": "x"})
        assert list(root.children) == ["show"]
        assert _walk(root, "show vlan members") is not None

    def test_shared_prefix_keeps_metadata(self):
        root = build_index({"show ip": "short", "show ip interface": "long"})
        assert _walk(root, "show ip").metadata.description == "short"
        assert _walk(root, "show ip interface").metadata.description == "long"

    def test_command_name_keeps_original_spelling(self):
        root = build_index({"Show  VLAN": "x"})
        assert _walk(root, "show vlan").metadata.command == "Show VLAN"

    def test_unknown_mapping_field_is_ignored(self):
        root = build_index({"show vlan": {"description": "x", "vendor_ext": {"a": "b"}}, "ping": "y"})
        node = _walk(root, "show vlan")
        assert node.metadata.description == "x"
        assert dict(node.children) == {}


class TestMalformedEntries:
    def test_empty_command_skipped(self):
        normalizer = Normalizer()
        root = normalizer.build({"": "empty", "   ": "blank", "show vlan": "ok"}, Shape.FLAT)
        assert list(root.children) == ["show"]
        assert len(normalizer.skipped) == 2

    def test_invalid_record_skipped(self):
        normalizer = Normalizer()
        root = normalizer.build(
            {"show vlan": {"description": 42, "parameters": "nope"}, "show arp": "ok"},
            Shape.FLAT,
        )
        assert _walk(root, "show vlan") is None
        assert _walk(root, "show arp") is not None
        assert normalizer.skipped == ["show vlan"]

    def test_records_without_command_skipped(self):
        normalizer = Normalizer()
        root = normalizer.build([{"description": "no name"}, "not a record", {"command": "ping"}])
        assert list(root.children) == ["ping"]
        assert len(normalizer.skipped) == 2

    def test_wrong_container_for_forced_shape(self):
        with pytest.raises(NormalizationError):
            build_index(["show vlan"], Shape.FLAT)

    def test_none_is_catastrophic(self):
        with pytest.raises(NormalizationError):
            build_index(None)


class TestNestedShape:
    def test_multi_word_keys_add_levels(self):
        root = build_index({"show ip": {"interface": "D1", "isis status": "D2"}})
        assert _walk(root, "show ip interface").metadata.description == "D1"
        assert _walk(root, "show ip isis status").metadata.description == "D2"
        assert _walk(root, "show ip isis").metadata is None

    def test_none_value_is_complete_command(self):
        root = build_index({"show": {"vlan": None}})
        node = _walk(root, "show vlan")
        assert node.is_complete
        assert node.metadata.description == ""

    def test_options_create_leaves_without_metadata(self):
        root = build_index({"debug": {"_options": ["On", "off"]}})
        debug = _walk(root, "debug")
        assert set(debug.children) == {"on", "off"}
        assert all(child.metadata is None for child in debug.children.values())

    def test_desc_key_describes_level(self):
        root = build_index({"show": {"_desc": "Show commands", "vlan": "x"}})
        assert _walk(root, "show").metadata.description == "Show commands"
        assert "_desc" not in _walk(root, "show").children

    def test_reserved_keys_never_become_tokens(self):
        root = build_index({"show": {"_internal": {"a": "b"}, "vlan": "x"}})
        assert list(_walk(root, "show").children) == ["vlan"]

    def test_field_named_tokens_stay_tokens(self):
        root = build_index({"interfaces": {"description": "Set alias", "speed": "Set speed"}})
        interfaces = _walk(root, "interfaces")
        assert interfaces.metadata is None
        assert set(interfaces.children) == {"description", "speed"}
        assert _walk(root, "interfaces description").metadata.description == "Set alias"

    def test_mapping_values_always_recurse(self):
        root = build_index({"show": {"vlan": {"description": "VLANs", "syntax": "show vlan"}}}, Shape.NESTED)
        vlan = _walk(root, "show vlan")
        assert vlan.metadata is None
        assert set(vlan.children) == {"description", "syntax"}

    def test_sibling_prefix_keys_merge(self):
        root = build_index({"show": {"_desc": "Show commands"}, "show running-config": "Running config"})
        show = _walk(root, "show")
        assert show.metadata.description == "Show commands"
        assert _walk(root, "show running-config").metadata.description == "Running config"

    def test_bad_options_skipped(self):
        normalizer = Normalizer()
        root = normalizer.build({"debug": {"_options": ["on", 3, ""]}, "ip": {"_options": "off"}})
        assert list(_walk(root, "debug").children) == ["on"]
        assert len(normalizer.skipped) == 3


class TestShapeEquivalence:
    FLAT = {
        "show ip interface": "D1",
        "show ip isis status": "D2",
        "show vlan": "D3",
        "ping": "D4",
    }
    RECORDS = [
        {"command": "show ip interface", "description": "D1"},
        {"command": "show ip isis status", "description": "D2"},
        {"command": "show vlan", "description": "D3"},
        {"command": "ping", "description": "D4"},
    ]
    NESTED = {
        "show": {
            "ip": {"interface": "D1", "isis status": "D2"},
            "vlan": "D3",
        },
        "ping": None,
    }

    def test_all_shapes_same_tree(self):
        flat = build_index(self.FLAT)
        assert flat.same_shape(build_index(self.RECORDS))
        assert flat.same_shape(build_index(self.NESTED))

    def test_idempotent(self, sample_commands):
        assert build_index(sample_commands).same_shape(build_index(sample_commands))

    def test_same_shape_detects_metadata_difference(self):
        assert not build_index({"show vlan": "x"}).same_shape(build_index({"show": {"vlan": {}}}))


class TestPrefixNode:
    def test_tree_is_frozen(self, root):
        assert root.frozen
        with pytest.raises(TreeFrozenError):
            root.child("new")
        with pytest.raises(TypeError):
            root.children["new"] = PrefixNode()  # type: ignore[index]

    def test_metadata_cannot_change_after_freeze(self, root):
        node = _walk(root, "show ip interface")
        with pytest.raises(TreeFrozenError):
            node.attach(CommandDetail(command="x"))

    def test_resolve_is_case_insensitive(self, root):
        assert root.resolve(["SHOW", "Ip"]) is _walk(root, "show ip")

    def test_resolve_dead_end(self, root):
        assert root.resolve(["show", "bogus"]) is None

    def test_resolve_empty_is_root(self, root):
        assert root.resolve([]) is root

    def test_iter_commands_sorted(self, root):
        commands = [command for command, _ in root.iter_commands()]
        assert commands == sorted(commands)
        assert "show ip" in commands
        assert "show" not in commands

    def test_count(self):
        root = build_index({"show ip interface": "x", "show vlan": "y"})
        # root, show, ip, interface, vlan
        assert root.count() == 5
