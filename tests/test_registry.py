"""Tests for lib_teambuilder/registry.py."""

from lib_teambuilder.config import FormationSettings
from lib_teambuilder.errors import AttributeUpdateError, ConfigurationError
from lib_teambuilder.registry import TeamRegistry
import pytest


@pytest.fixture
def registry(scenario_a_pool):
    reg = TeamRegistry(FormationSettings(team_size=6, seed=3))
    reg.load(scenario_a_pool)
    return reg


class TestParticipants:
    def test_register_rejects_duplicate_id(self, make_participant):
        reg = TeamRegistry()
        reg.register(make_participant("P1"))
        with pytest.raises(ValueError, match="already exists"):
            reg.register(make_participant("p1"))

    def test_load_rejects_duplicates(self, make_participant):
        with pytest.raises(ValueError, match="Duplicate"):
            TeamRegistry().load([make_participant("X"), make_participant("x")])

    def test_participants_are_copies(self, registry):
        first = registry.participants[0]
        first.skill_level = 10
        assert registry.participants[0].skill_level == 5


class TestUpdateParticipant:
    def test_valid_update(self, registry):
        updated = registry.update_participant("a01", {"skill_level": 9, "preferred_role": "supporter"})
        assert updated.skill_level == 9
        assert updated.preferred_role == "SUPPORTER"

    def test_invalid_value_changes_nothing(self, registry):
        before = next(p for p in registry.participants if p.id == "A01")
        with pytest.raises(AttributeUpdateError):
            registry.update_participant("A01", {"preferred_game": "Go", "skill_level": 42})
        after = next(p for p in registry.participants if p.id == "A01")
        assert after == before

    def test_unknown_field(self, registry):
        with pytest.raises(AttributeUpdateError, match="Unknown field"):
            registry.update_participant("A01", {"nickname": "ace"})

    def test_id_cannot_change(self, registry):
        with pytest.raises(AttributeUpdateError, match="cannot be changed"):
            registry.update_participant("A01", {"id": "Z99"})

    def test_unknown_participant(self, registry):
        with pytest.raises(AttributeUpdateError, match="not found"):
            registry.update_participant("nobody", {"skill_level": 3})


class TestFormation:
    def test_form_and_snapshot(self, registry):
        result = registry.form()
        assert len(result.compliant_teams) == 2
        snapshot = registry.snapshot()
        assert snapshot is not None
        assert [t.team_id for t in snapshot.all_teams] == [t.team_id for t in result.all_teams]

    def test_snapshot_is_isolated(self, registry):
        registry.form()
        registry.snapshot().compliant_teams[0].members.clear()
        assert registry.snapshot().compliant_teams[0].size == 6

    def test_no_snapshot_before_forming(self, registry):
        assert registry.snapshot() is None
        assert registry.find_team_of("A00") is None

    def test_find_team_of(self, registry):
        registry.form()
        team = registry.find_team_of("a05")
        assert team is not None
        assert team.contains_participant("A05") is not None

    def test_form_empty_registry(self):
        with pytest.raises(ConfigurationError):
            TeamRegistry().form()

    def test_form_with_explicit_size(self, registry):
        result = registry.form(team_size=4)
        assert result.target_size == 4


class TestWithdraw:
    def test_withdraw_before_forming(self, registry):
        assert registry.withdraw("A03") is None
        assert "A03" not in {p.id for p in registry.participants}

    def test_withdraw_reforms_teams(self, registry):
        registry.form()
        result = registry.withdraw("a03")
        assert result is not None
        ids = [m.id for t in result.all_teams for m in t.members]
        assert "A03" not in ids
        assert len(ids) == 11
        assert registry.find_team_of("A03") is None

    def test_withdraw_unknown(self, registry):
        with pytest.raises(ValueError, match="not found"):
            registry.withdraw("ghost")

    def test_withdraw_last_participant_clears_teams(self, make_participant):
        reg = TeamRegistry(FormationSettings(team_size=2))
        reg.register(make_participant("ONLY"))
        reg.form()
        assert reg.withdraw("ONLY") is None
        assert reg.snapshot() is None


class TestLateChanges:
    def test_register_after_forming_places_newcomer(self, registry, make_participant):
        registry.form()
        team = registry.register(make_participant("NEW", "Zelda", 5, "SUPPORTER", "BALANCED"))

        assert team is not None
        assert team.contains_participant("NEW") is not None
        assert registry.find_team_of("new") is not None

        snapshot = registry.snapshot()
        placed = [m.id for t in snapshot.all_teams for m in t.members]
        assert sorted(placed) == sorted(p.id for p in registry.participants)

    def test_register_before_forming_places_nobody(self, registry, make_participant):
        assert registry.register(make_participant("NEW")) is None
        assert registry.find_team_of("NEW") is None

    def test_update_shows_in_formed_teams(self, registry):
        registry.form()
        registry.update_participant("A01", {"skill_level": 10})
        team = registry.find_team_of("A01")
        assert team.contains_participant("A01").skill_level == 10
