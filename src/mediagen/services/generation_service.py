"""Host-facing generation service."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Mapping

import structlog

from ..capabilities.capabilities_base import MappingParameterContext
from ..capabilities.capabilities_registry import PlatformRegistry
from ..config import AppConfig
from ..exceptions import MediaGenError, ValidationError
from ..jobs.jobs_models import ExecutionMode, JobResult
from ..jobs.jobs_runner import JobRunner
from ..providers.providers_base import ProviderAdapter
from ..providers.providers_factory import create_adapter

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class GenerationRequest:
    """One item of work: which model to run, how, and with what inputs."""

    platform: str
    model: str
    interface_type: str = ExecutionMode.ASYNC.value
    parameters: Mapping[str, Any] = field(default_factory=dict)


def parse_interface_type(value: str) -> ExecutionMode:
    try:
        return ExecutionMode(str(value).lower())
    except ValueError:
        allowed = ", ".join(mode.value for mode in ExecutionMode)
        raise ValidationError(
            f"Unsupported interface type '{value}'. Expected one of: {allowed}"
        ) from None


@dataclass(slots=True)
class GenerationService:
    """Resolve platform and capability, build the request and run the job.

    Adapters are created lazily and kept per platform so each provider
    credential is loaded once for the lifetime of the service.
    """

    config: AppConfig
    platforms: PlatformRegistry = field(default_factory=PlatformRegistry.build_default)
    adapter_factory: Callable[[str], ProviderAdapter] | None = None
    _adapters: Dict[str, ProviderAdapter] = field(default_factory=dict, init=False, repr=False)

    def adapter_for(self, platform: str) -> ProviderAdapter:
        self.platforms.get(platform)
        adapter = self._adapters.get(platform)
        if adapter is None:
            if self.adapter_factory is not None:
                adapter = self.adapter_factory(platform)
            else:
                adapter = create_adapter(platform, config=self.config)
            self._adapters[platform] = adapter
        return adapter

    def runner_for(self, platform: str) -> JobRunner:
        return JobRunner.from_config(self.adapter_for(platform), self.config)

    def list_platforms(self) -> list[dict[str, str]]:
        return self.platforms.list_platform_options()

    def list_models(self, platform: str) -> list[dict[str, str]]:
        return self.platforms.get(platform).capabilities.list_display_options()

    def input_schema(self, platform: str, discriminator: str = "model") -> list[dict[str, Any]]:
        return self.platforms.get(platform).capabilities.aggregate_input_schemas(discriminator)

    async def verify(self, platform: str) -> Any:
        """Exercise the provider credential against its test endpoint."""

        adapter = self.adapter_for(platform)
        log = logger.bind(platform=platform)
        try:
            payload = await adapter.verify_credentials()
        except MediaGenError as exc:
            log.warning("generation.verify.failed", error=str(exc))
            raise
        log.info("generation.verify.ok")
        return payload

    async def generate(
        self,
        platform: str,
        model: str,
        interface_type: str,
        parameters: Mapping[str, Any] | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> JobResult:
        mode = parse_interface_type(interface_type)
        entry = self.platforms.get(platform)
        bound = entry.capabilities.create(model, MappingParameterContext(dict(parameters or {})))
        log = logger.bind(platform=platform, model=model, mode=mode.value)

        body = bound.build_request()
        runner = self.runner_for(platform)
        log.info("generation.start")
        try:
            if mode is ExecutionMode.SYNC:
                result = await runner.execute_sync(bound.descriptor, body, bound.normalize)
            else:
                result = await runner.execute_async(
                    bound.descriptor, body, bound.normalize, cancel_event=cancel_event
                )
        except MediaGenError as exc:
            log.warning("generation.failed", error=str(exc), error_type=type(exc).__name__)
            raise
        log.info("generation.done", token=result.token, polls=result.polls)
        return result

    async def generate_batch(
        self,
        items: Iterable[GenerationRequest],
        *,
        continue_on_fail: bool = False,
        cancel_event: asyncio.Event | None = None,
    ) -> list[dict[str, Any]]:
        """Run items one after another.

        With ``continue_on_fail`` a failed item yields ``{"error", "item"}``
        in its slot and the batch goes on; otherwise the first error aborts.
        """

        outputs: list[dict[str, Any]] = []
        for index, item in enumerate(items):
            try:
                result = await self.generate(
                    item.platform,
                    item.model,
                    item.interface_type,
                    item.parameters,
                    cancel_event=cancel_event,
                )
            except MediaGenError as exc:
                if not continue_on_fail:
                    raise
                logger.warning("generation.batch.item_failed", item=index, error=str(exc))
                outputs.append({"error": str(exc), "item": index})
                continue
            outputs.append(result.as_dict())
        return outputs


__all__ = ["GenerationRequest", "GenerationService", "parse_interface_type"]
