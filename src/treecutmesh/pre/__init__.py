"""
The PRE layer builds the mesh: Whitney refinement, neighbor stitching,
2:1 balancing, interface equalization and the orchestrating mesher.
"""
