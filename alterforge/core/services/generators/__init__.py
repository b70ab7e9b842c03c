"""
Template generators — produce GeneratedFile objects for a project.

Each generator is a pure function: selections in, GeneratedFile(s) out.
Writing them to disk is the scaffold orchestrator's job.
"""
