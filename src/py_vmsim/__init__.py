"""py-vmsim — a demand-paging and process-swapping simulator.

Processes run binary searches over virtual arrays while sharing a
limited pool of physical frames.  Page faults are served from the pool;
when it runs dry, the faulting process is swapped out whole and waits
in a FIFO queue until a finishing process returns enough frames.

Typical use::

    from py_vmsim.loader import parse_workload
    from py_vmsim.scheduler import simulate
    from py_vmsim.system import SystemState

    system = SystemState.create(parse_workload("1 1  100  42"))
    report = simulate(system)
"""

__version__ = "0.1.0"
