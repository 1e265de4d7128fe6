"""Toolpath generation engine.

This module runs a list of machining operations and streams their motion
events to a sink, supporting:
- Pocket operations (five area-clearing strategies, roughing/finishing)
- Profile operations (tool radius compensation, ramped entry, arcs)
- Per-operation error isolation with a warnings list
- Cooperative cancellation between operations
- Concurrent generation with in-order replay
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Tuple

from .config import Config
from .errors import ToolpathError
from .models import GCodeSettings, GenerationResult, Operation, PocketOperation, ProfileOperation
from .motion import Comment, MotionCommand, MotionRecorder, MotionSink
from .pocket_generator import PocketGenerator
from .profile_generator import ProfileGenerator

logger = logging.getLogger(__name__)


class ToolpathGenerator:
    """Toolpath generator for a list of operations."""

    def __init__(
        self,
        settings: Optional[GCodeSettings] = None,
        segment_length: Optional[float] = None,
        contour_tolerance: Optional[float] = None
    ):
        """
        Initialize the generator.

        Args:
            settings: Output flags; read from Config when omitted
            segment_length: Chord length for curve discretisation
            contour_tolerance: Closing tolerance for arbitrary contours
        """
        self.settings = settings if settings is not None else GCodeSettings.from_config()
        self.segment_length = segment_length if segment_length is not None else Config.SEGMENT_LENGTH
        self.contour_tolerance = (
            contour_tolerance if contour_tolerance is not None else Config.CONTOUR_TOLERANCE
        )
        self.warnings: List[str] = []

    def _generator_for(self, operation: Operation):
        if isinstance(operation, PocketOperation):
            return PocketGenerator(self.settings, self.segment_length, self.contour_tolerance)
        if isinstance(operation, ProfileOperation):
            return ProfileGenerator(self.settings, self.segment_length, self.contour_tolerance)
        raise TypeError(f"Unsupported operation type: {type(operation).__name__}")

    def generate_operation(self, operation: Operation, sink: MotionSink) -> List[str]:
        """
        Generate one operation, isolating its failures.

        A ToolpathError stops this operation only: the message is recorded
        as a warning and emitted as a comment.

        Args:
            operation: Pocket or profile operation
            sink: Receiver of the motion events

        Returns:
            Warnings raised while generating the operation
        """
        generator = self._generator_for(operation)
        label = operation.name or type(operation).__name__
        try:
            generator.generate(operation, sink)
        except ToolpathError as e:
            message = f"{label}: {e}"
            logger.warning("Operation %s skipped: %s", label, e)
            generator.warnings.append(message)
            if self.settings.use_comments:
                sink.emit(Comment(f"Error: {message}"))
        return generator.warnings

    def _record(self, operation: Operation) -> Tuple[List[MotionCommand], List[str]]:
        recorder = MotionRecorder()
        warnings = self.generate_operation(operation, recorder)
        return recorder.events, warnings

    def generate(
        self,
        operations: Iterable[Operation],
        sink: Optional[MotionSink] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
        max_workers: Optional[int] = None
    ) -> GenerationResult:
        """
        Generate all operations in caller order.

        Args:
            operations: Operations to run; disabled ones are skipped
            sink: Receiver of the motion events. When omitted the events are
                  recorded and returned in the result
            should_cancel: Polled between operations; True stops the run
            max_workers: Operations generated concurrently (Config.MAX_WORKERS
                         when omitted). Events still reach the sink in
                         operation order, never interleaved

        Returns:
            GenerationResult with the recorded events (when no sink was
            given), warnings and progress counters
        """
        recorder = None
        if sink is None:
            recorder = MotionRecorder()
            sink = recorder
        workers = max_workers if max_workers is not None else Config.MAX_WORKERS
        self.warnings = []

        active = []
        for operation in operations:
            if operation.enabled:
                active.append(operation)
            else:
                logger.debug("Skipping disabled operation %s", operation.name or type(operation).__name__)

        generated = 0
        cancelled = False
        if workers > 1 and len(active) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(self._record, operation) for operation in active]
                for future in futures:
                    if should_cancel is not None and should_cancel():
                        cancelled = True
                        for pending in futures:
                            pending.cancel()
                        break
                    events, warnings = future.result()
                    for event in events:
                        sink.emit(event)
                    self.warnings.extend(warnings)
                    generated += 1
        else:
            for operation in active:
                if should_cancel is not None and should_cancel():
                    cancelled = True
                    break
                self.warnings.extend(self.generate_operation(operation, sink))
                generated += 1

        if cancelled:
            message = f"Generation cancelled after {generated} of {len(active)} operations"
            logger.info(message)
            self.warnings.append(message)

        return GenerationResult(
            events=recorder.events if recorder is not None else [],
            warnings=list(self.warnings),
            operations_generated=generated,
            cancelled=cancelled
        )
