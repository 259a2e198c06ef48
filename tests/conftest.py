pytest_plugins = [
    "lsedit_core.unittest_tools.fixtures",
]
