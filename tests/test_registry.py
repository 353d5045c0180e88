"""Tests for the command registry and resolver."""

import dataclasses

import pytest

from poolapi.registry import (
    API_COMMANDS,
    CommandSpec,
    ProcessTarget,
    registered_commands,
    resolve,
)


class TestRegistryTable:
    def test_last_entry_is_terminator(self):
        assert API_COMMANDS[-1].target is ProcessTarget.NONE

    def test_names_are_unique(self):
        names = [spec.name for spec in API_COMMANDS]
        assert len(names) == len(set(names))

    def test_fixed_command_table(self):
        table = {spec.name: (spec.target, spec.remote_command, spec.requires_params)
                 for spec in registered_commands()}
        assert table == {
            "connector.stats": (ProcessTarget.CONNECTOR, "stats", False),
            "stratifier.stats": (ProcessTarget.STRATIFIER, "stats", False),
            "generator.stats": (ProcessTarget.GENERATOR, "stats", False),
        }

    def test_specs_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            API_COMMANDS[0].name = "other"  # type: ignore[misc]


class TestResolve:
    @pytest.mark.parametrize("spec", registered_commands(), ids=lambda s: s.name)
    def test_registered_names_resolve_to_their_spec(self, spec: CommandSpec):
        assert resolve(spec.name) is spec

    @pytest.mark.parametrize("name", [
        "doesnotexist",
        "generator",
        "generator.stat",
        "generator.stats ",
        "Generator.stats",
        "GENERATOR.STATS",
        "x.generator.stats",
        "stats",
    ])
    def test_no_false_positives(self, name: str):
        assert resolve(name) is None

    def test_terminator_never_matches(self):
        assert resolve("") is None

    def test_repeated_lookups_are_stable(self):
        assert resolve("stratifier.stats") is resolve("stratifier.stats")
