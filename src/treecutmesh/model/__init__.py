"""
The MODEL layer contains pure data structures: cells, the quadtree arena,
per-cell geometric fractions and the level-set shapes.
It has NO knowledge of refinement policy or plotting.
"""
