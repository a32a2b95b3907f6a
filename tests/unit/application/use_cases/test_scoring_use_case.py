import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from predict_sidecar.application.use_cases.scoring_use_case import (
    ScoreModelsUseCase,
    prediction_labels,
)
from predict_sidecar.domain.entities.model import Model
from predict_sidecar.domain.ports.recorder import IRecorder
from tests.conftest import ListRecorder, StubRuntime, make_metadata, make_points

NOW = 1_700_000_000


def _use_case(store, models, recorder, **kwargs):
    return ScoreModelsUseCase(store, models, recorder, clock=lambda: NOW, **kwargs)


def _fill_ready(store):
    store.append("btc_usd", make_points([1, 10, 20, 30]))
    store.append("eth_usd", make_points([200, 300, 100, 400]))


class _BlockingRuntime(StubRuntime):
    def __init__(self):
        super().__init__()
        self.release = threading.Event()
        self.entered = 0

    def run(self, inputs, outputs):
        self.entered += 1
        self.release.wait(timeout=5)
        return super().run(inputs, outputs)


class _FailingRecorder(IRecorder):
    def record(self, metric):
        raise RuntimeError("sink unavailable")


@pytest.mark.asyncio
async def test_scores_ready_model_and_records_prediction(store, model, recorder):
    _fill_ready(store)

    report = await _use_case(store, [model], recorder).execute()

    assert report.scored == [model.key]
    assert report.failed == {}
    assert len(recorder.metrics) == 1
    metric = recorder.metrics[0]
    assert metric.labels == {
        "__name__": "predict_sidecar:btc_usd",
        "predict_duration": "300",
    }
    # Output 0.5 over the target window [10, 20, 30].
    assert metric.data_point.value == pytest.approx(20.0)
    assert metric.data_point.timestamp == NOW
    assert report.predictions[model.key] == pytest.approx(20.0)


@pytest.mark.asyncio
async def test_feeds_runtime_with_normalized_tensor(store, model, stub_runtime, recorder):
    _fill_ready(store)

    await _use_case(store, [model], recorder).execute()

    inputs, outputs = stub_runtime.calls[0]
    assert outputs == ["dense/BiasAdd"]
    tensor = inputs["lstm_input"]
    assert tensor.shape == (1, 3, 2)
    assert tensor.dtype == np.float32
    np.testing.assert_allclose(tensor[0, :, 0], [0.0, 0.5, 1.0])
    np.testing.assert_allclose(tensor[0, :, 1], [2 / 3, 0.0, 1.0], rtol=1e-6)


@pytest.mark.asyncio
async def test_target_with_exactly_input_steps_points_is_skipped(
    store, model, stub_runtime, recorder
):
    store.append("btc_usd", make_points([10, 20, 30]))
    store.append("eth_usd", make_points([1, 2, 3]))

    report = await _use_case(store, [model], recorder).execute()

    assert report.skipped == [model.key]
    assert stub_runtime.calls == []
    assert recorder.metrics == []


@pytest.mark.asyncio
async def test_missing_target_is_skipped(store, model, recorder):
    report = await _use_case(store, [model], recorder).execute()

    assert report.skipped == [model.key]


@pytest.mark.asyncio
async def test_missing_column_fails_model(store, recorder):
    model = Model(runtime=StubRuntime(), metadata=make_metadata())
    store.append("btc_usd", make_points([1, 2, 3, 4]))

    report = await _use_case(store, [model], recorder).execute()

    assert report.failed == {model.key: "MissingSeriesError"}
    assert recorder.metrics == []


@pytest.mark.asyncio
async def test_inference_error_aborts_model_without_recording(store, recorder):
    runtime = StubRuntime(error=RuntimeError("graph exploded"))
    model = Model(runtime=runtime, metadata=make_metadata())
    _fill_ready(store)

    report = await _use_case(store, [model], recorder).execute()

    assert report.failed == {model.key: "InferenceFailedError"}
    assert recorder.metrics == []


@pytest.mark.asyncio
async def test_inference_timeout_fails_model(store, recorder):
    runtime = _BlockingRuntime()
    model = Model(runtime=runtime, metadata=make_metadata())
    _fill_ready(store)

    try:
        report = await _use_case(
            store, [model], recorder, inference_timeout_seconds=0.05
        ).execute()
    finally:
        runtime.release.set()

    assert report.failed == {model.key: "InferenceFailedError"}
    assert recorder.metrics == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "output",
    [
        np.array([0.5], dtype=np.float32),
        np.zeros((1, 0), dtype=np.float32),
        np.array([[np.nan]], dtype=np.float32),
    ],
)
async def test_unusable_output_fails_model(store, recorder, output):
    model = Model(runtime=StubRuntime(output=output), metadata=make_metadata())
    _fill_ready(store)

    report = await _use_case(store, [model], recorder).execute()

    assert report.failed == {model.key: "InferenceFailedError"}


@pytest.mark.asyncio
async def test_constant_target_window_fails_model(store, recorder):
    model = Model(
        runtime=StubRuntime(), metadata=make_metadata(columns=("eth_usd",))
    )
    store.append("btc_usd", make_points([5, 5, 5, 5]))
    store.append("eth_usd", make_points([1, 2, 3]))

    report = await _use_case(store, [model], recorder).execute()

    assert report.failed == {model.key: "DegenerateWindowError"}
    assert recorder.metrics == []


@pytest.mark.asyncio
async def test_one_failing_model_does_not_stop_the_others(store, recorder):
    broken = Model(
        runtime=StubRuntime(error=RuntimeError("boom")),
        metadata=make_metadata(model_key="broken"),
    )
    healthy = Model(
        runtime=StubRuntime(output=np.array([[1.0]], dtype=np.float32)),
        metadata=make_metadata(
            model_key="eth", target="eth_usd", predict_future_duration=600
        ),
    )
    _fill_ready(store)

    report = await _use_case(store, [broken, healthy], recorder).execute()

    assert report.failed == {"broken": "InferenceFailedError"}
    assert report.scored == ["eth"]
    assert [m.name for m in recorder.metrics] == ["predict_sidecar:eth_usd"]
    # Output 1.0 over the eth window [300, 100, 400].
    assert recorder.metrics[0].data_point.value == pytest.approx(400.0)


@pytest.mark.asyncio
async def test_recorder_failure_is_reported(store, model):
    _fill_ready(store)

    report = await _use_case(store, [model], _FailingRecorder()).execute()

    assert report.scored == []
    assert report.failed == {model.key: "RecorderError"}


@pytest.mark.asyncio
async def test_cycle_with_no_models_is_empty(store, recorder):
    report = await _use_case(store, [], recorder).execute()

    assert (report.scored, report.skipped, report.failed) == ([], [], {})


def test_prediction_labels_use_target_and_duration():
    labels = prediction_labels(make_metadata(target="cpu", predict_future_duration=60))

    assert labels == {"__name__": "predict_sidecar:cpu", "predict_duration": "60"}


def test_models_property_returns_a_copy(store, model, recorder):
    use_case = _use_case(store, [model], recorder)

    use_case.models.clear()

    assert use_case.models == [model]


@pytest.mark.asyncio
async def test_hung_model_does_not_starve_other_models(store, recorder):
    executor = ThreadPoolExecutor(max_workers=2)
    asyncio.get_running_loop().set_default_executor(executor)
    hung_runtime = _BlockingRuntime()
    hung = Model(runtime=hung_runtime, metadata=make_metadata(model_key="hung"))
    healthy = Model(
        runtime=StubRuntime(),
        metadata=make_metadata(model_key="healthy", target="eth_usd"),
    )
    _fill_ready(store)
    use_case = _use_case(
        store, [hung, healthy], recorder, inference_timeout_seconds=0.1
    )

    try:
        reports = [await use_case.execute() for _ in range(3)]
    finally:
        hung_runtime.release.set()
        executor.shutdown(wait=True)

    for report in reports:
        assert report.scored == ["healthy"]
        assert report.failed == {"hung": "InferenceFailedError"}
    assert hung_runtime.entered == 1


@pytest.mark.asyncio
async def test_model_is_retried_once_previous_call_finished(store, recorder):
    runtime = _BlockingRuntime()
    model = Model(runtime=runtime, metadata=make_metadata())
    _fill_ready(store)
    use_case = _use_case(store, [model], recorder, inference_timeout_seconds=0.05)

    first = await use_case.execute()
    runtime.release.set()
    for _ in range(100):
        if runtime.calls:
            break
        await asyncio.sleep(0.01)
    await asyncio.sleep(0.05)
    second = await use_case.execute()

    assert first.failed == {model.key: "InferenceFailedError"}
    assert second.scored == [model.key]
    assert runtime.entered == 2


@pytest.mark.asyncio
async def test_target_outside_columns_is_denormalized_over_target_window(
    store, recorder
):
    runtime = StubRuntime()
    model = Model(runtime=runtime, metadata=make_metadata(columns=("eth_usd",)))
    _fill_ready(store)

    report = await _use_case(store, [model], recorder).execute()

    assert report.scored == [model.key]
    tensor = runtime.calls[0][0]["lstm_input"]
    assert tensor.shape == (1, 3, 1)
    np.testing.assert_allclose(tensor[0, :, 0], [2 / 3, 0.0, 1.0], rtol=1e-6)
    # Output 0.5 over the btc window [10, 20, 30]; the eth window would give 250.
    assert recorder.metrics[0].data_point.value == pytest.approx(20.0)
    assert recorder.metrics[0].name == "predict_sidecar:btc_usd"
