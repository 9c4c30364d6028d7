"""
This __init__.py file is kept in the root tests directory while the test
subdirectories have none.

It makes pytest treat tests/ as a package, so test modules with the same
name in different subdirectories do not clash. Subdirectories work as
namespace packages (PEP 420) without their own __init__.py.
"""
