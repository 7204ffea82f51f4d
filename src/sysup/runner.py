"""Sequential execution of an update plan."""

from __future__ import annotations

from loguru import logger

from sysup.executor import StreamingExecutor
from sysup.render import ConsoleRenderer
from sysup.steps import UpdatePlan


class UpdateRunner:
    """Runs plan steps in order and stops at the first step that does not succeed."""

    def __init__(self, executor: StreamingExecutor, renderer: ConsoleRenderer) -> None:
        self.executor = executor
        self.renderer = renderer

    def run(self, plan: UpdatePlan) -> bool:
        self.renderer.info(f"[INFO] Detected system: {plan.label}")
        for index, step in enumerate(plan.steps, start=1):
            if step.banner:
                self.renderer.separator(step.banner)
            if step.notice:
                self.renderer.info(step.notice)

            outcome = self.executor.execute(step.invocation)
            if not outcome.ok:
                logger.info(
                    "plan.step_failed platform={} step={} outcome={} exit_status={}",
                    plan.platform.value,
                    index,
                    outcome.kind.value,
                    outcome.exit_status,
                )
                if step.failure_message:
                    self.renderer.error(step.failure_message)
                return False

        if plan.success_message:
            self.renderer.info(plan.success_message)
        return True
