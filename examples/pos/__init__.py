"""
Fish counter POS demo — one cashier session in the terminal.

Structure:
- seed.py  — in-memory store with a small catalog and sales history
- cli.py   — interactive command loop
- main.py  — entry point (demo store or the REST backend)

Run: python -m examples.pos.main
"""
