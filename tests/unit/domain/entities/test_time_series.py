import dataclasses

import pytest

from predict_sidecar.domain.entities.errors import (
    InsufficientHistoryError,
    MissingSeriesError,
)
from predict_sidecar.domain.entities.time_series import DataPoint, Metric


def test_metric_name_is_the_name_label():
    metric = Metric(
        labels={"__name__": "predict_sidecar:btc_usd", "predict_duration": "300"},
        data_point=DataPoint(value=1.0, timestamp=1),
    )

    assert metric.name == "predict_sidecar:btc_usd"


def test_data_point_is_immutable():
    point = DataPoint(value=1.0, timestamp=1)

    with pytest.raises(dataclasses.FrozenInstanceError):
        point.value = 2.0


def test_scoring_errors_carry_the_series_key():
    missing = MissingSeriesError("eth_usd")
    short = InsufficientHistoryError("eth_usd", required=3, available=2)

    assert missing.message == "missing datapoints for: eth_usd"
    assert missing.series_key == "eth_usd"
    assert (short.required, short.available) == (3, 2)
    assert missing.details == {}
