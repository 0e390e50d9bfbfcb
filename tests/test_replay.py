"""
回放数据表读取与拼接的单元测试
"""

import numpy as np
import pandas as pd
import pytest

from neutrino_event_generator import (
    Cylinder,
    LIInjector,
    build_replay_table,
    read_replay_groups,
    write_replay_groups,
    load_replay_table,
    make_rng,
)
from neutrino_event_generator.testing import create_synthetic_replay_groups


class TestBuildReplayTable:
    """测试拼接回放表"""

    def test_layout(self):
        """测试行号与列"""
        table = build_replay_table(create_synthetic_replay_groups(rows_per_group=(4, 3)))
        assert len(table) == 7
        assert list(table.index) == list(range(1, 8))
        assert table.index.name == "row_id"
        for column in ("initial_energy", "final1_particle_type", "final2_zenith", "one_weight", "flux_weight"):
            assert column in table.columns

    def test_group_order(self):
        """测试组顺序保留"""
        groups = create_synthetic_replay_groups(rows_per_group=(4, 3))
        table = build_replay_table(groups)
        assert table.loc[5, "initial_energy"] == groups[1]["initial"]["energy"].iloc[0]
        assert table.loc[4, "one_weight"] == groups[0]["one_weights"][3]

    def test_mismatched_lengths(self):
        """测试长度不一致"""
        group = create_synthetic_replay_groups(rows_per_group=(4,))[0]
        group["final_2"] = group["final_2"].iloc[:3]
        with pytest.raises(ValueError):
            build_replay_table([group])

    def test_weight_length(self):
        """测试权重长度不一致"""
        group = create_synthetic_replay_groups(rows_per_group=(4,))[0]
        group["one_weights"] = group["one_weights"][:2]
        with pytest.raises(ValueError):
            build_replay_table([group])

    def test_missing_parts(self):
        """测试缺少表或列"""
        group = create_synthetic_replay_groups()[0]
        del group["final_1"]
        with pytest.raises(ValueError):
            build_replay_table([group])

        group = create_synthetic_replay_groups()[0]
        group["initial"] = group["initial"].drop(columns=["zenith"])
        with pytest.raises(ValueError):
            build_replay_table([group])

        with pytest.raises(ValueError):
            build_replay_table([])


class TestReplayDirectory:
    """测试回放目录读写"""

    def test_write_and_load(self, tmp_path):
        """测试写入后读取得到相同的表"""
        groups = create_synthetic_replay_groups(rows_per_group=(3, 2))
        write_replay_groups(groups, tmp_path / "replay")
        assert sorted(p.name for p in (tmp_path / "replay").iterdir()) == ["group_000", "group_001"]

        loaded = load_replay_table(tmp_path / "replay")
        pd.testing.assert_frame_equal(loaded, build_replay_table(groups), check_exact=False)

    def test_read_groups(self, tmp_path):
        """测试读取分组"""
        write_replay_groups(create_synthetic_replay_groups(rows_per_group=(2, 2, 1)), tmp_path)
        groups = read_replay_groups(tmp_path)
        assert len(groups) == 3
        assert set(groups[0]) == {"initial", "final_1", "final_2", "one_weights", "flux_weights"}

    def test_group_order_beyond_three_digits(self, tmp_path):
        """测试超过1000组时按写入顺序读取"""
        groups = create_synthetic_replay_groups(rows_per_group=(1,) * 1001, seed=5)
        write_replay_groups(groups, tmp_path)
        loaded = load_replay_table(tmp_path)
        expected = [g["initial"]["energy"].iloc[0] for g in groups]
        np.testing.assert_allclose(loaded["initial_energy"].to_numpy(), expected)
        assert loaded.loc[1001, "one_weight"] == pytest.approx(groups[1000]["one_weights"][0])

    def test_missing_directory(self, tmp_path):
        """测试目录不存在"""
        with pytest.raises(FileNotFoundError):
            read_replay_groups(tmp_path / "nope")

    def test_empty_directory(self, tmp_path):
        """测试空目录"""
        with pytest.raises(ValueError):
            read_replay_groups(tmp_path)

    def test_injector_from_directory(self, tmp_path):
        """测试从目录创建注入器"""
        write_replay_groups(create_synthetic_replay_groups(rows_per_group=(3,)), tmp_path)
        injector = LIInjector.from_directory(tmp_path)
        rng = make_rng(81)
        rows = {injector.draw(rng).source_row_index for _ in range(3)}
        assert rows == {1, 2, 3}

    def test_directory_drop_starting(self, tmp_path):
        """测试从目录读取时过滤起始事件"""
        write_replay_groups(create_synthetic_replay_groups(rows_per_group=(100,), seed=4), tmp_path)
        with pytest.raises(ValueError):
            LIInjector.from_directory(tmp_path, drop_starting=True)
        volume = Cylinder((0, 0, 0), 600.0, 400.0)
        injector = LIInjector.from_directory(tmp_path, drop_starting=True, volume=volume)
        starts = injector.states[["initial_x", "initial_y", "initial_z"]].to_numpy()
        assert len(injector) < 100
        assert not any(volume.contains(p) for p in starts)
        assert np.array_equal(injector.states.index.to_numpy(), np.arange(1, len(injector) + 1))
