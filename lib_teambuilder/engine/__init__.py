"""Team formation engine.

Sub-modules:
- constraints – hard rules and violation diagnostics
- scoring     – candidate ranking and chunk-local best search
- parallel    – chunked candidate search on a worker pool
- assembler   – greedy compliant-team assembly
- overflow    – leftover partitioning
- balancer    – skill balancing by member swaps
"""
