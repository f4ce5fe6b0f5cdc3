def build_summary_prompt(content: str, sentences: str) -> str:
    """Build the single user instruction sent to the provider."""
    return f"Summarize this text in {sentences} sentences. Respond ONLY with the summary:\n\n{content}"


def build_summary_messages(content: str, sentences: str) -> list[dict[str, str]]:
    return [{"role": "user", "content": build_summary_prompt(content, sentences)}]
