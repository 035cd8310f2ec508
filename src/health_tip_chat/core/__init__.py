"""Request orchestration core: prompts, model client, resilience."""
