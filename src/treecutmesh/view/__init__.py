"""
The VIEW layer draws meshes and fractions with Matplotlib.
"""
