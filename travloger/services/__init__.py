"""
External collaborators (hosted auth, payment links, email, storage) and
multi-step business flows.
"""
