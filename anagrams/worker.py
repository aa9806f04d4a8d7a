import importlib.util
import logging
import socket
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pyarrow as pa
import pyarrow.parquet as pq
from pyarrow import fs
from pyarrow.fs import FileSelector, FileType

from .codec import decode, encode
from .config import Settings
from .filters import emit
from .signature import partition_hint

LOG = logging.getLogger("anagrams.worker")

WORKER_ID = socket.gethostname()
JOB_FUNCTIONS = ("iterator_fn", "map_function", "combine_function", "reduce_function")

# Shuffle files: one row per (signature, partial entry) produced by a map task.
SHUFFLE_SCHEMA = pa.schema([("key", pa.string()), ("value", pa.binary())])


@dataclass
class MapTask:
    task_id: int
    data_paths: List[str]
    num_reducers: int
    output_dir: str


@dataclass
class ReduceTask:
    task_id: int
    partition_id: int
    input_dir: str
    output_path: str
    include_signature: bool = False


@dataclass
class Ack:
    ok: bool
    message: str
    counters: Dict[str, int] = field(default_factory=dict)


def get_filesystem():
    return fs.LocalFileSystem()


def ensure_parent_dir(filesystem, path: str) -> None:
    parent = path.rsplit("/", 1)[0] if "/" in path else ""
    if parent:
        filesystem.create_dir(parent, recursive=True)


def write_lines(filesystem, path, lines):
    ensure_parent_dir(filesystem, path)
    with filesystem.open_output_stream(path) as out:
        for line in lines:
            if not line.endswith("\n"):
                line = line + "\n"
            out.write(line.encode("utf-8"))


def shuffle_path(output_dir: str, task_id: int, partition_id: int) -> str:
    return f"{output_dir.rstrip('/')}/{WORKER_ID}_{task_id}_{partition_id}.parquet"


def load_job(job_path: str, settings: Optional[Settings] = None):
    """Load a job file and return the object exposing the job functions.

    A job file either defines ``make_job(settings)`` or the job functions at
    module level.
    """
    spec = importlib.util.spec_from_file_location("user_job", job_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load job file {job_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    make_job = getattr(module, "make_job", None)
    job = make_job(settings) if make_job is not None else module
    for function_name in JOB_FUNCTIONS:
        if getattr(job, function_name, None) is None:
            raise AttributeError(f"{function_name} not found in {job_path}")
    return job


class TaskWorker:
    """Runs map and reduce tasks of one job against a pyarrow filesystem."""

    def __init__(self, job, filesystem=None):
        self.job = job
        self.fs = filesystem or get_filesystem()

    def run_map(self, task: MapTask) -> Ack:
        LOG.info("[map] worker=%s task_id=%d files=%d", WORKER_ID, task.task_id, len(task.data_paths))
        try:
            grouped = defaultdict(list)
            lines = 0
            words = 0
            for data_path in task.data_paths:
                with self.fs.open_input_stream(data_path) as f:
                    file_bytes = f.readall()
                metadata = {"size": len(file_bytes), "file_path": data_path}
                for key, val in self.job.iterator_fn(file_bytes, metadata):
                    lines += 1
                    for k, v in self.job.map_function(key, val):
                        grouped[k].append(v)
                        words += 1

            partitions = [
                {"key": [], "value": []}
                for _ in range(task.num_reducers)
            ]
            for k in sorted(grouped):
                signature, entry = self.job.combine_function(k, grouped[k])
                rid = partition_hint(signature, task.num_reducers)
                partitions[rid]["key"].append(signature)
                partitions[rid]["value"].append(encode(entry))

            for rid, partition in enumerate(partitions):
                out_path = shuffle_path(task.output_dir, task.task_id, rid)
                ensure_parent_dir(self.fs, out_path)
                table = pa.table(partition, schema=SHUFFLE_SCHEMA)
                with self.fs.open_output_stream(out_path) as out:
                    pq.write_table(table, out)
                LOG.debug("[map] wrote partition rid=%d rows=%d -> %s", rid, table.num_rows, out_path)
            LOG.info("[map] task %d complete (lines=%d, words=%d, signatures=%d)",
                     task.task_id, lines, words, len(grouped))
            return Ack(ok=True, message="map done",
                       counters={"lines": lines, "words": words, "signatures": len(grouped)})
        except Exception as e:
            LOG.error("[map] task %d failed: %s", task.task_id, e, exc_info=True)
            return Ack(ok=False, message=str(e))

    def run_reduce(self, task: ReduceTask) -> Ack:
        LOG.info("[reduce] worker=%s task_id=%d partition=%d", WORKER_ID, task.task_id, task.partition_id)
        try:
            infos = self.fs.get_file_info(FileSelector(task.input_dir, recursive=False))
            files = sorted(
                info.path
                for info in infos
                if info.type == FileType.File and info.path.endswith(f"_{task.partition_id}.parquet")
            )

            tables = [pq.read_table(path, filesystem=self.fs) for path in files]
            if tables:
                merged = pa.concat_tables(tables)
            else:
                merged = SHUFFLE_SCHEMA.empty_table()

            df = merged.to_pandas()
            total_in = len(df)
            if df.empty:
                grouped = {}
            else:
                grouped = df.groupby("key", sort=True)["value"].apply(list)

            records = []
            for k, values in grouped.items():
                records.extend(self.job.reduce_function(k, [decode(v) for v in values]))

            out_lines = list(emit(records, task.include_signature))
            write_lines(self.fs, task.output_path, out_lines)
            LOG.info("[reduce] task %d complete (in=%d, out=%d)", task.task_id, total_in, len(out_lines))
            return Ack(ok=True, message="reduce done",
                       counters={"partials": total_in, "groups": len(out_lines)})
        except Exception as e:
            LOG.error("[reduce] task %d failed: %s", task.task_id, e, exc_info=True)
            return Ack(ok=False, message=str(e))
