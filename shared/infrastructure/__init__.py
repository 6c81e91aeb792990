"""Framework glue shared by the apps."""
