# slotbook/schemas/__init__.py
