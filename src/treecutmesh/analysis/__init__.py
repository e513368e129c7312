"""
The ANALYSIS layer integrates over the finished mesh (quadrature rules and
geometric fractions). It never modifies the tree.
"""
