import itertools
import logging
import os
import threading
from collections import deque
from concurrent import futures
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pyarrow.fs import FileType

from .config import Settings
from .jobs.anagrams import make_job
from .worker import MapTask, ReduceTask, TaskWorker, get_filesystem

LOG = logging.getLogger("anagrams.runner")


@dataclass
class JobResult:
    ok: bool
    message: str
    job_id: int
    file_paths: List[str] = field(default_factory=list)
    counters: Dict[str, int] = field(default_factory=dict)


class _State:
    """Per-job bookkeeping: pending tasks and attempts per task."""
    def __init__(self):
        self.lock = threading.Lock()
        self.pending_maps = deque()
        self.pending_reduces = deque()
        self.attempts = {}  # task_id -> attempts so far
        self.counters = {}

    def add_counters(self, counters: Dict[str, int]):
        with self.lock:
            for name, value in counters.items():
                self.counters[name] = self.counters.get(name, 0) + value


class LocalJobRunner:
    """Run the anagram job in-process: map tasks on a thread pool, then reduces."""

    _job_counter = itertools.count()

    def __init__(self, job=None, settings: Optional[Settings] = None, filesystem=None):
        self.settings = settings or Settings()
        self.job = job or make_job(self.settings)
        self.fs = filesystem or get_filesystem()

    def create_tasks(self, state: _State, inputs: List[str], output_dir: str):
        temp_dir = f"{output_dir}/temp"
        task_counter = 0
        for fp in inputs:
            # One map task per input file
            state.pending_maps.append(MapTask(
                task_id=task_counter,
                data_paths=[fp],
                num_reducers=self.settings.num_reducers,
                output_dir=temp_dir,
            ))
            task_counter += 1
        for i in range(self.settings.num_reducers):
            state.pending_reduces.append(ReduceTask(
                task_id=task_counter,
                partition_id=i,
                input_dir=temp_dir,
                output_path=f"{output_dir}/reduce_{i}.txt",
                include_signature=self.settings.include_signature,
            ))
            task_counter += 1
        return temp_dir

    def run(self, inputs: List[str], output_dir: str, overwrite: bool = False) -> JobResult:
        job_id = next(self._job_counter)
        inputs = [os.path.abspath(p) for p in inputs]
        output_dir = os.path.abspath(output_dir).rstrip("/")
        if not inputs:
            raise ValueError("no input files given")
        for path in inputs:
            if self.fs.get_file_info(path).type != FileType.File:
                raise FileNotFoundError(f"Input file not found: {path}")
        if self.fs.get_file_info(output_dir).type != FileType.NotFound:
            if not overwrite:
                raise FileExistsError(f"Output directory already exists: {output_dir}")
            LOG.info("Deleting existing output directory %s", output_dir)
            self.fs.delete_dir(output_dir)

        state = _State()
        temp_dir = self.create_tasks(state, inputs, output_dir)
        worker = TaskWorker(self.job, self.fs)
        LOG.info("Created job %d: %d map task(s), %d reduce task(s)",
                 job_id, len(state.pending_maps), len(state.pending_reduces))

        failed_stage = None
        try:
            if not self._run_stage(state, state.pending_maps, worker.run_map, "map"):
                failed_stage = "map"
            elif not self._run_stage(state, state.pending_reduces, worker.run_reduce, "reduce"):
                failed_stage = "reduce"
        finally:
            if self.fs.get_file_info(temp_dir).type != FileType.NotFound:
                self.fs.delete_dir(temp_dir)

        if failed_stage is not None:
            # A failed job leaves no output behind, so it can be rerun as is.
            LOG.warning("Job %d failed in %s stage; removing %s", job_id, failed_stage, output_dir)
            if self.fs.get_file_info(output_dir).type != FileType.NotFound:
                self.fs.delete_dir(output_dir)
            return JobResult(ok=False, message=f"{failed_stage} stage failed", job_id=job_id,
                             counters=state.counters)

        file_paths = [f"{output_dir}/reduce_{i}.txt" for i in range(self.settings.num_reducers)]
        LOG.info("Job %d completed (%s)", job_id,
                 ", ".join(f"{k}={v}" for k, v in sorted(state.counters.items())))
        return JobResult(ok=True, message="job done", job_id=job_id,
                         file_paths=file_paths, counters=state.counters)

    def _run_stage(self, state: _State, pending: deque, run_task, stage: str) -> bool:
        """Run every pending task, requeueing failures up to max_attempts."""
        with futures.ThreadPoolExecutor(max_workers=self.settings.num_mappers) as pool:
            while pending:
                batch = list(pending)
                pending.clear()
                running = {pool.submit(run_task, task): task for task in batch}
                for fut in futures.as_completed(running):
                    task = running[fut]
                    response = fut.result()
                    attempts = state.attempts.get(task.task_id, 0) + 1
                    state.attempts[task.task_id] = attempts
                    if response.ok:
                        state.add_counters(response.counters)
                        continue
                    if attempts >= self.settings.max_attempts:
                        LOG.error("%s task %d failed after %d attempt(s): %s",
                                  stage, task.task_id, attempts, response.message)
                        return False
                    LOG.warning("%s task %d failed: %s. Retrying...", stage, task.task_id, response.message)
                    pending.append(task)
        return True
