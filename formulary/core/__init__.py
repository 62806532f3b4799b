"""Engine core: value kinds, recipes, the rule registry, fields and reports."""
