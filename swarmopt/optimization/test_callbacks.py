# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pickle
import logging
import numpy as np
import swarmopt.common.typing as tp
from . import callbacks
from . import swarm as swarmlib


def _sphere(position: np.ndarray) -> float:
    return float(position.dot(position))


def _make_swarm(max_iterations: int = 10) -> swarmlib.ParticleSwarm:
    return swarmlib.ParticleSwarm(_sphere, [(-2, 2)] * 3, particle_count=5, max_iterations=max_iterations, random_state=12)


def test_optimization_printer(capsys: tp.Any) -> None:
    swarm = _make_swarm()
    swarm.register_callback("iteration", callbacks.OptimizationPrinter(print_interval_iterations=3))
    swarm.run()
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("After 3 evaluation(s), best value is ")


def test_optimization_logger(caplog: tp.Any) -> None:
    logger = logging.getLogger("swarmopt.test")
    swarm = _make_swarm()
    swarm.register_callback(
        "iteration", callbacks.OptimizationLogger(logger=logger, log_level=logging.INFO, log_interval_iterations=5)
    )
    with caplog.at_level(logging.INFO, logger="swarmopt.test"):
        swarm.run()
    messages = [r.getMessage() for r in caplog.records if r.name == "swarmopt.test"]
    assert len(messages) == 2
    assert messages[-1].startswith("After 10 evaluation(s)")


def test_history_recorder() -> None:
    swarm = _make_swarm()
    recorder = callbacks.HistoryRecorder(record_positions=True)
    swarm.register_callback("iteration", recorder)
    result = swarm.run()
    assert len(recorder) == 10
    assert len(recorder.positions) == 10
    assert recorder.positions[0].shape == (5, 3)
    assert recorder.values[-1] == result.value
    np.testing.assert_array_equal(recorder.best_positions[-1], result.position)
    df = recorder.to_dataframe()
    assert list(df.columns) == ["value", "x#0", "x#1", "x#2"]
    assert df.index.name == "iteration"
    assert len(df) == 10
    assert df["value"].is_monotonic_decreasing
    np.testing.assert_array_equal(df.loc[9, ["x#0", "x#1", "x#2"]].values, result.position)


def test_empty_history_recorder() -> None:
    recorder = callbacks.HistoryRecorder()
    assert not recorder.positions
    df = recorder.to_dataframe()
    assert df.empty
    assert list(df.columns) == ["value"]


class FakeBar:
    def __init__(self) -> None:
        self.total = 0
        self.n = 0
        self.closed = False

    def update(self, num: int) -> None:
        self.n += num

    def close(self) -> None:
        self.closed = True


def test_progress_bar(monkeypatch: tp.Any) -> None:
    tqdm = __import__("tqdm")
    bars: tp.List[FakeBar] = []

    def fake_tqdm() -> FakeBar:
        bars.append(FakeBar())
        return bars[-1]

    monkeypatch.setattr(tqdm, "tqdm", fake_tqdm)
    swarm = _make_swarm(max_iterations=4)
    progress = callbacks.ProgressBar()
    swarm.register_callback("iteration", progress)
    swarm.run()
    assert len(bars) == 1
    assert bars[0].total == 4
    assert bars[0].n == 4
    assert bars[0].closed
    state = pickle.loads(pickle.dumps(progress))
    assert state._progress_bar is None  # pylint: disable=protected-access
