import random
import time

import pytest

from csopesy.config import Config
from csopesy.process import Machine, Process, ProcessState
from csopesy.scheduler import Policy, Scheduler


def make(policy="fcfs", cpus=2, ins=3, quantum=1):
    config = Config(
        num_cpu=cpus, scheduler=policy, min_ins=ins, max_ins=ins, quantum_cycles=quantum
    )
    return Scheduler(config, Machine(random.Random(0)))


def test_policy_from_config():
    assert make("rr").policy is Policy.RR
    assert make("fcfs").policy is Policy.FCFS


def test_unknown_policy_raises():
    with pytest.raises(ValueError):
        make("lottery")


def test_create_process_queues_named_process():
    sched = make()
    proc = sched.create_process("alpha")
    assert list(sched.ready_queue) == [proc]
    assert proc.name == "alpha"
    assert len(proc.commands) == 3


def test_dispatch_fills_free_cores_in_order():
    sched = make(cpus=2)
    procs = [sched.create_process(n) for n in ("a", "b", "c")]
    placed = sched.dispatch()
    assert placed == procs[:2]
    assert sched.cores == procs[:2]
    assert [p.assigned_core for p in placed] == [0, 1]
    assert all(p.state is ProcessState.RUNNING for p in placed)
    assert list(sched.ready_queue) == [procs[2]]


def test_idle_core_step_returns_none():
    sched = make()
    assert sched.step_core(0) is None


def test_fcfs_runs_process_to_completion():
    sched = make("fcfs")
    proc = sched.create_process("a")
    sched.dispatch()
    executed = [sched.step_core(0) for _ in range(3)]
    assert executed == proc.commands
    assert proc.state is ProcessState.FINISHED
    assert sched.finished == [proc]
    assert sched.cores[0] is None
    assert proc.finish_time is not None


def test_rr_preempts_after_quantum():
    sched = make("rr", cpus=1, quantum=1)
    first = sched.create_process("a")
    second = sched.create_process("b")
    sched.dispatch()
    sched.step_core(0)
    assert sched.cores[0] is None
    assert list(sched.ready_queue) == [second, first]
    assert first.state is ProcessState.READY
    assert first.program_counter == 1


def test_rr_quantum_reset_on_dispatch():
    sched = make("rr", cpus=1, quantum=2)
    proc = sched.create_process("a")
    sched.dispatch()
    sched.step_core(0)
    sched.step_core(0)
    assert list(sched.ready_queue) == [proc]
    sched.dispatch()
    assert proc.quantum_used == 0
    sched.step_core(0)
    assert sched.finished == [proc]


def test_render_status_idle_and_busy():
    sched = make("fcfs")
    assert "CPU Utilization: 0%" in sched.render_status()
    sched.create_process("a")
    sched.dispatch()
    text = sched.render_status()
    assert "CPU Utilization: 100%" in text
    assert "process01 (" in text
    assert "\tCore: 0\t0 / 3" in text


def test_render_status_lists_finished():
    sched = make("fcfs")
    sched.create_process("a")
    sched.dispatch()
    for _ in range(3):
        sched.step_core(0)
    text = sched.render_status()
    assert "\tFinished\t3 / 3" in text
    assert text.startswith("\n" + "-" * 61)


def test_write_report_appends(tmp_path):
    sched = make("rr")
    path = tmp_path / "report.txt"
    sched.write_report(path)
    sched.write_report(path)
    content = path.read_text()
    assert content.count("CPU Utilization: 0%") == 2
    assert content.count("Finished processes:") == 2


def test_search_log_finds_ready_process_by_name_and_label():
    sched = make("rr")
    proc = Process(pid=5, name="alpha", commands=["Hello world from process alpha!", "add"])
    sched.machine.execute(proc, 3)
    sched.ready_queue.append(proc)
    by_name = sched.search_log("alpha")
    by_label = sched.search_log("process5")
    assert 'Core:3 "Hello world from process alpha!"' in by_name
    assert 'Core:3 "Hello world from process alpha!"' in by_label
    assert by_name.endswith("alpha")


def test_search_log_ignores_non_ready_processes():
    sched = make("rr")
    proc = Process(pid=5, name="alpha", commands=["Hello world from process alpha!"])
    sched.machine.execute(proc, 0)
    sched.finished.append(proc)
    assert "Hello world" not in sched.search_log("alpha")


def test_threads_generate_and_finish_processes():
    sched = make("rr", cpus=2, ins=2, quantum=1)
    sched.instruction_delay = 0.001
    sched.idle_delay = 0.005
    sched.generation_delay = 0.005
    sched.start()
    try:
        with pytest.raises(RuntimeError):
            sched.start()
        deadline = time.monotonic() + 5
        while not sched.finished and time.monotonic() < deadline:
            time.sleep(0.01)
        sched.stop_generation()
        assert sched.generating is False
    finally:
        sched.shutdown()
    assert sched.finished
    assert all(p.finished() for p in sched.finished)
    assert all(p.name == f"process{p.pid}" for p in sched.finished)