"""
View-model layer: record editors and list views held by the shell.
"""
