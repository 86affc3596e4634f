"""Framework-free order status domain: states, transitions, outcomes and collaborator contracts."""
