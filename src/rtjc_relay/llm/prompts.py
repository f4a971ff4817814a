import yaml
from pathlib import Path

DEFAULT_SUMMARY_PROMPT = (
    "You summarize news articles for a tech podcast chat. "
    "Write a short summary of the article below in Russian: three to five sentences, "
    "plain text, no headings and no markup."
)

def load_prompt(name: str, default: str = "") -> str:
    # Prioritize .yaml for structured prompts
    yaml_path = Path("data/prompts") / f"{name}.yaml"
    if yaml_path.exists():
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
            return data.get("content", "")

    # Fallback to .md
    md_path = Path("data/prompts") / f"{name}.md"
    if md_path.exists():
        with open(md_path, "r", encoding="utf-8") as f:
            return f.read()

    if default:
        return default
    raise FileNotFoundError(f"Prompt {name} not found as .yaml or .md")
