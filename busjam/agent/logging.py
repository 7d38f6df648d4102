from __future__ import annotations

from typing import Any, Dict


class RunLogger:
    """Minimal logging interface used by the decision cycle."""

    def log_params(self, params: Dict[str, Any]) -> None:
        raise NotImplementedError

    def log_metric(self, key: str, value: float, step: int | None = None) -> None:
        raise NotImplementedError

    def log_text(self, text: str, artifact_file: str) -> None:
        raise NotImplementedError

    def set_tags(self, tags: Dict[str, Any]) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class NullRunLogger(RunLogger):
    """No-op logger used when MLflow (or similar) is disabled."""

    def log_params(self, params: Dict[str, Any]) -> None:
        return None

    def log_metric(self, key: str, value: float, step: int | None = None) -> None:
        return None

    def log_text(self, text: str, artifact_file: str) -> None:
        return None

    def set_tags(self, tags: Dict[str, Any]) -> None:
        return None

    def close(self) -> None:
        return None


class MemoryRunLogger(RunLogger):
    """Keeps everything in lists; handy for tests and for hosts that ship their own sink."""

    def __init__(self) -> None:
        self.params: Dict[str, Any] = {}
        self.metrics: list[tuple[str, float, int | None]] = []
        self.texts: Dict[str, str] = {}
        self.tags: Dict[str, Any] = {}
        self.closed = False

    def log_params(self, params: Dict[str, Any]) -> None:
        self.params.update(params)

    def log_metric(self, key: str, value: float, step: int | None = None) -> None:
        self.metrics.append((key, float(value), step))

    def log_text(self, text: str, artifact_file: str) -> None:
        self.texts[artifact_file] = text

    def set_tags(self, tags: Dict[str, Any]) -> None:
        self.tags.update(tags)

    def close(self) -> None:
        self.closed = True

    def values(self, key: str) -> list[float]:
        return [value for name, value, _ in self.metrics if name == key]


class MLflowRunLogger(RunLogger):
    """MLflow-backed implementation of RunLogger."""

    def __init__(
        self,
        *,
        experiment_name: str | None = None,
        run_name: str | None = None,
        tracking_uri: str | None = None,
        tags: Dict[str, Any] | None = None,
    ) -> None:
        try:
            import mlflow
        except ModuleNotFoundError as exc:  # pragma: no cover - import guard
            raise RuntimeError(
                "MLflow is not installed. Install the tracking extra via `pip install busjam[tracking]`."
            ) from exc

        self._mlflow = mlflow
        if tracking_uri is not None:
            self._mlflow.set_tracking_uri(tracking_uri)
        if experiment_name is not None:
            self._mlflow.set_experiment(experiment_name)

        if self._mlflow.active_run() is not None:
            self._mlflow.end_run()
        self._run = self._mlflow.start_run(run_name=run_name)
        if tags:
            self.set_tags(tags)

    def log_params(self, params: Dict[str, Any]) -> None:
        self._mlflow.log_params(params)

    def log_metric(self, key: str, value: float, step: int | None = None) -> None:
        self._mlflow.log_metric(key, float(value), step=step)

    def log_text(self, text: str, artifact_file: str) -> None:
        self._mlflow.log_text(text, artifact_file)

    def set_tags(self, tags: Dict[str, Any]) -> None:
        self._mlflow.set_tags(tags)

    def close(self) -> None:
        if self._mlflow.active_run() is not None:
            self._mlflow.end_run()


__all__ = ["RunLogger", "NullRunLogger", "MemoryRunLogger", "MLflowRunLogger"]
