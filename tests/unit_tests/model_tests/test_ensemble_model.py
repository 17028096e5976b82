import itertools

import numpy as np
import pytest

from ensemble_quantiles._models import EnsembleModel
from ensemble_quantiles._providers import SummaryVectorNotFoundError, VectorMetadata

from .mocks.summary_run_provider_mock import (
    SummaryRunProviderMock,
    create_constant_runs,
    days_after_start,
)


def _metadata(unit: str, keyword: str = "WOPR") -> VectorMetadata:
    return VectorMetadata(
        unit=unit,
        is_total=False,
        is_rate=True,
        is_historical=False,
        keyword=keyword,
        wgname="OP_1",
        get_num=None,
    )


def test_bounds_are_independent_of_add_order() -> None:
    runs = [
        SummaryRunProviderMock("a", {"X": 1.0}, start_day=10, end_day=50),
        SummaryRunProviderMock("b", {"X": 1.0}, start_day=0, end_day=30),
        SummaryRunProviderMock("c", {"X": 1.0}, start_day=5, end_day=120),
        SummaryRunProviderMock("d", {"X": 1.0}, start_day=20, end_day=60),
    ]

    for ordering in itertools.permutations(runs):
        ensemble = EnsembleModel(min_realizations=1)
        for run in ordering:
            ensemble.add_run(run)
        assert ensemble.start_time == days_after_start(0)
        assert ensemble.end_time == days_after_start(120)


def test_first_run_sets_bounds() -> None:
    ensemble = EnsembleModel()
    ensemble.add_run(SummaryRunProviderMock("a", {"X": 1.0}, start_day=3, end_day=7))
    assert ensemble.start_time == days_after_start(3)
    assert ensemble.end_time == days_after_start(7)


def test_finalize_builds_time_axis() -> None:
    ensemble = EnsembleModel.from_runs(create_constant_runs(12), num_interp=5)

    axis = ensemble.time_axis
    assert len(axis) == 5
    assert axis[0] == days_after_start(0)
    assert axis[-1] == days_after_start(100)
    assert np.all(np.diff(axis) == np.timedelta64(25 * 86400, "s"))


def test_too_few_realizations() -> None:
    with pytest.raises(ValueError, match="Too few realizations"):
        EnsembleModel.from_runs(create_constant_runs(5))
    with pytest.raises(ValueError, match="Too few realizations"):
        EnsembleModel.from_runs(create_constant_runs(9))

    ensemble = EnsembleModel.from_runs(create_constant_runs(10))
    assert len(ensemble.runs) == 10


def test_no_runs() -> None:
    with pytest.raises(ValueError, match="No simulation runs"):
        EnsembleModel().finalize()


def test_invalid_num_interp() -> None:
    with pytest.raises(ValueError, match=">= 2"):
        EnsembleModel.from_runs(create_constant_runs(10), num_interp=1)


def test_time_axis_requires_finalize() -> None:
    ensemble = EnsembleModel()
    for run in create_constant_runs(10):
        ensemble.add_run(run)
    with pytest.raises(ValueError, match="finalize"):
        _ = ensemble.time_axis

    ensemble.finalize(num_interp=3)
    with pytest.raises(ValueError, match="finalized"):
        ensemble.add_run(SummaryRunProviderMock("late", {"X": 0.0}))


def test_metadata_comes_from_reference_run() -> None:
    runs = [
        SummaryRunProviderMock(
            f"run-{i}", {"WOPR:OP_1": 1.0}, metadata={"WOPR:OP_1": _metadata("SM3/DAY")}
        )
        for i in range(10)
    ]
    ensemble = EnsembleModel.from_runs(runs)

    assert ensemble.reference_run is runs[0]
    assert ensemble.vector_metadata("WOPR:OP_1") == _metadata("SM3/DAY")
    with pytest.raises(SummaryVectorNotFoundError):
        ensemble.vector_metadata("FOPT")


def test_check_vector_metadata_warns_on_mismatch() -> None:
    runs = [
        SummaryRunProviderMock(
            f"run-{i}", {"WOPR:OP_1": 1.0}, metadata={"WOPR:OP_1": _metadata("SM3/DAY")}
        )
        for i in range(10)
    ]
    runs.append(
        SummaryRunProviderMock(
            "odd-one", {"WOPR:OP_1": 1.0}, metadata={"WOPR:OP_1": _metadata("STB/DAY")}
        )
    )
    ensemble = EnsembleModel.from_runs(runs)

    with pytest.warns(UserWarning, match="odd-one"):
        mismatches = ensemble.check_vector_metadata(["WOPR:OP_1", "WOPR:OP_1"])
    assert len(mismatches) == 1


def test_check_vector_metadata_consistent() -> None:
    runs = [
        SummaryRunProviderMock(
            f"run-{i}", {"WOPR:OP_1": 1.0}, metadata={"WOPR:OP_1": _metadata("SM3/DAY")}
        )
        for i in range(10)
    ]
    ensemble = EnsembleModel.from_runs(runs)
    assert ensemble.check_vector_metadata(["WOPR:OP_1"]) == []
