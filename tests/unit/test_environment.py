"""
Unit tests for MinefieldEnv.

Tests the Gymnasium interface: spaces, first-move safety, rewards,
seeding and rendering.
"""
import pytest
import numpy as np
from minefield import CellStatus, FieldConfig, MinefieldEnv


@pytest.fixture
def env(small_config: FieldConfig) -> MinefieldEnv:
    """Small environment, already reset."""
    environment = MinefieldEnv(config=small_config, render_mode="ansi")
    environment.reset(seed=0)
    return environment


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_default_config(self) -> None:
        """Default environment is beginner sized."""
        environment = MinefieldEnv()
        assert environment.action_space.n == 81
        assert environment.observation_space.shape == (9, 9)

    def test_reset_observation_all_covered(self, small_config: FieldConfig) -> None:
        """Reset returns a fully covered int8 observation."""
        environment = MinefieldEnv(config=small_config)
        obs, info = environment.reset(seed=1)
        assert obs.shape == (4, 4)
        assert obs.dtype == np.int8
        assert np.all(obs == CellStatus.COVERED)
        assert info["uncovered"] == 0
        assert info["total_safe"] == 14

    def test_observation_in_space(self, env: MinefieldEnv) -> None:
        """Observations always lie in the observation space."""
        obs, _, _, _, _ = env.step(0)
        assert env.observation_space.contains(obs)

    def test_initial_action_mask(self, env: MinefieldEnv) -> None:
        """Every location is a valid action before the first move."""
        mask = env.get_action_mask()
        assert mask.shape == (16,)
        assert mask.all()


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test rewards and termination."""

    def test_first_move_is_safe(self, small_config: FieldConfig) -> None:
        """The first uncover of an episode never hits a mine."""
        environment = MinefieldEnv(config=small_config)
        for seed in range(50):
            environment.reset(seed=seed)
            _, reward, _, _, info = environment.step(seed % 16)
            assert reward in (1.0, 10.0)
            assert info["lost"] is False

    def test_first_move_populates_layout(self, env: MinefieldEnv) -> None:
        """Mines are placed on the first move with that location safe."""
        assert env.layout.is_populated() is False
        env.step(5)
        assert env.layout.is_populated() is True
        assert env.layout.has_mine(1, 1) is False

    def test_repeated_action_is_invalid(self, env: MinefieldEnv) -> None:
        """Uncovering an uncovered location is penalized."""
        env.step(0)
        _, reward, _, _, _ = env.step(0)
        assert reward == pytest.approx(-0.1)

    def test_mask_excludes_uncovered(self, env: MinefieldEnv) -> None:
        """Uncovered locations drop out of the action mask."""
        env.step(0)
        assert not env.get_action_mask()[0]

    def test_episode_terminates(self, env: MinefieldEnv) -> None:
        """Playing valid actions ends the episode in a win or a loss."""
        terminated = False
        info = {}
        for _ in range(16):
            valid = np.flatnonzero(env.get_action_mask())
            _, _, terminated, truncated, info = env.step(int(valid[0]))
            assert truncated is False
            if terminated:
                break
        assert terminated is True
        assert info["won"] or info["lost"]

    def test_same_seed_same_mines(self, small_config: FieldConfig) -> None:
        """Seeding reset makes mine placement reproducible."""
        environment = MinefieldEnv(config=small_config)
        layouts = []
        for _ in range(2):
            environment.reset(seed=123)
            environment.step(0)
            layouts.append(environment.layout.to_debug_string())
        assert layouts[0] == layouts[1]

    def test_reset_starts_new_game(self, env: MinefieldEnv) -> None:
        """Reset clears the layout and the visible field."""
        env.step(0)
        obs, info = env.reset()
        assert np.all(obs == CellStatus.COVERED)
        assert env.layout.is_populated() is False
        assert info["steps"] == 0


# ============================================================================
# Render Tests
# ============================================================================

class TestRender:
    """Test text rendering."""

    def test_ansi_render_is_text(self, env: MinefieldEnv) -> None:
        """ANSI mode returns the visible field as text."""
        rendered = env.render()
        assert rendered == "\n".join([". . . ."] * 4)

    def test_no_render_mode(self, small_config: FieldConfig) -> None:
        """Without a render mode nothing is returned."""
        environment = MinefieldEnv(config=small_config)
        environment.reset()
        assert environment.render() is None
