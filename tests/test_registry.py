import pytest

from cvars.core.declarations import ConfigVarDeclaration
from cvars.core.registry import ConfigVarRegistry, is_valid_name
from cvars.core.variable import ConfigVar
from cvars.flags import ConfigFlags


@pytest.mark.parametrize("name", ["player.health", "_hidden", "+attack", "-jump", "r.fov2", "a"])
def test_valid_names(name):
    assert is_valid_name(name)


@pytest.mark.parametrize("name", ["Player.Health", "1health", ".x", "has space", "a/b", "", "x\n"])
def test_invalid_names(name):
    assert not is_valid_name(name)


def test_register_then_lookup_returns_same_record():
    registry = ConfigVarRegistry()
    cvar = ConfigVar("player.health", "", "100", ConfigFlags.SAVE)
    assert registry.register(cvar) is True
    assert registry.lookup("player.health") is cvar
    assert "player.health" in registry
    assert len(registry) == 1


def test_duplicate_registration_is_rejected():
    registry = ConfigVarRegistry()
    first = registry.create("player.health", "first", "100")
    second = ConfigVar("player.health", "second", "50")
    second.reset_to_default()

    assert registry.register(second) is False
    assert registry.lookup("player.health") is first
    assert first.value == "100"
    assert first.description == "first"


def test_invalid_name_is_not_registered():
    registry = ConfigVarRegistry()
    for name in ("Player.Health", "1health"):
        cvar = registry.create(name, "", "1")
        assert cvar.value == "1"
        assert registry.lookup(name) is None
    assert len(registry) == 0


def test_lookup_does_not_normalize_case():
    registry = ConfigVarRegistry()
    registry.create("player.health", "", "100")
    assert registry.lookup("PLAYER.HEALTH") is None


def test_iteration_is_sorted_by_name():
    registry = ConfigVarRegistry()
    for name in ("zeta", "alpha", "mid"):
        registry.create(name)
    assert [cvar.name for cvar in registry] == ["alpha", "mid", "zeta"]
    assert registry.names() == ["alpha", "mid", "zeta"]


def test_dirty_flags_union_of_changed_vars():
    registry = ConfigVarRegistry()
    health = registry.create("player.health", "", "100", ConfigFlags.SAVE)
    god = registry.create("debug.godmode", "", "0", ConfigFlags.CHEAT)
    assert registry.dirty_flags == ConfigFlags.NONE

    health.value = "1"
    god.value = "1"
    assert registry.dirty_flags == ConfigFlags.SAVE | ConfigFlags.CHEAT

    registry.clear_dirty_flags(ConfigFlags.SAVE)
    assert registry.dirty_flags == ConfigFlags.CHEAT


def test_clear_dirty_flags_keeps_unnamed_bits():
    registry = ConfigVarRegistry()
    registry.mark_dirty(ConfigFlags(0x40) | ConfigFlags.SAVE)
    registry.clear_dirty_flags(ConfigFlags.SAVE)
    assert int(registry.dirty_flags) == 0x40


def test_reset_all_to_default():
    registry = ConfigVarRegistry()
    health = registry.create("player.health", "", "100", ConfigFlags.SAVE)
    fov = registry.create("r.fov", "", "90")
    health.value = "5"
    fov.value = "60"
    registry.clear_dirty_flags()

    registry.reset_all_to_default()

    assert health.value == "100"
    assert fov.value == "90"
    assert registry.dirty_flags == ConfigFlags.SAVE


def test_initialize_registers_declarations_without_dirtying():
    registry = ConfigVarRegistry()
    cvars = registry.initialize(
        [
            ConfigVarDeclaration(name="player.health", default_value="100", flags=ConfigFlags.SAVE),
            ConfigVarDeclaration(owner="Renderer", field="FieldOfView", default_value="90"),
            ConfigVarDeclaration(name="Bad Name"),
            ConfigVarDeclaration(default_value="orphan"),
        ]
    )

    assert set(cvars) == {"player.health", "renderer.fieldofview"}
    assert cvars["renderer.fieldofview"].int_value == 90
    assert registry.lookup("player.health") is cvars["player.health"]
    assert registry.dirty_flags == ConfigFlags.NONE


def test_initialize_runs_once():
    registry = ConfigVarRegistry()
    first = registry.initialize([ConfigVarDeclaration(name="a", default_value="1")])
    again = registry.initialize([ConfigVarDeclaration(name="b", default_value="2")])
    assert again == first
    assert "b" not in registry


def test_declaration_accepts_combined_flags():
    decl = ConfigVarDeclaration(name="sv.maxplayers", flags=ConfigFlags.SAVE | ConfigFlags.SERVER_INFO)
    assert decl.flags == ConfigFlags.SAVE | ConfigFlags.SERVER_INFO
    assert isinstance(decl.flags, ConfigFlags)


def test_registries_are_isolated():
    one = ConfigVarRegistry()
    two = ConfigVarRegistry()
    cvar = one.create("player.health", "", "100", ConfigFlags.SAVE)
    cvar.value = "1"
    assert one.dirty_flags == ConfigFlags.SAVE
    assert two.dirty_flags == ConfigFlags.NONE
    assert two.lookup("player.health") is None


def test_initialize_keeps_pending_changes(tmp_path):
    registry = ConfigVarRegistry()
    name = registry.create("cl.name", "", "player", ConfigFlags.SAVE)
    name.value = "gary"

    registry.initialize([ConfigVarDeclaration(name="r.fov", default_value="90")])

    assert registry.dirty_flags == ConfigFlags.SAVE
    out = tmp_path / "user.cfg"
    assert registry.save_changed_vars(out) is True
    assert out.read_text(encoding="utf-8") == 'cl.name "gary"\n'


def test_record_bound_to_another_registry_is_rejected():
    first = ConfigVarRegistry()
    second = ConfigVarRegistry()
    cvar = first.create("player.health", "", "100", ConfigFlags.SAVE)

    assert second.register(cvar) is False
    assert second.lookup("player.health") is None
    assert cvar.registry is first

    cvar.value = "1"
    assert first.dirty_flags == ConfigFlags.SAVE
    assert second.dirty_flags == ConfigFlags.NONE
