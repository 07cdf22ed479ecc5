"""User prompt builders for each generation kind."""

from __future__ import annotations

from paperdraft.models.document import TextBlock
from paperdraft.utils.citations import format_marker

PAPER_TITLE_PLACEHOLDER = "Academic Research Paper"
NO_CONTENT_AVAILABLE = "No content available yet."

_SECTION_OPENERS = {
    "abstract": (
        'Write a compelling academic abstract for "{title}". This should read like a seasoned '
        "researcher's work - clear, confident, and engaging without being overly technical."
    ),
    "introduction": (
        'Write an engaging introduction for "{title}". Start with the broader context and '
        "gradually narrow to your specific research question."
    ),
    "methodology": (
        'Write a clear methodology section for "{title}". Explain your approach as if you are '
        "walking a colleague through your research process."
    ),
    "conclusion": (
        'Write a conclusion for "{title}". Synthesize your key contributions and their broader '
        "significance."
    ),
}

_RESULTS_OPENER = (
    'Write a results and discussion section for "{title}". Present your findings with '
    "confidence and discuss their implications thoughtfully."
)


def _paper_title(title: str) -> str:
    return title or PAPER_TITLE_PLACEHOLDER


def build_section_prompt(section: TextBlock, paper_title: str, abstract: str) -> str:
    """Prompt for drafting one section."""

    key = section.title.strip().lower()
    title = _paper_title(paper_title)
    if key in _SECTION_OPENERS:
        prompt = _SECTION_OPENERS[key].format(title=title)
    elif "results" in key or "discussion" in key:
        prompt = _RESULTS_OPENER.format(title=title)
    else:
        prompt = (
            f'Write an academic section for "{section.title}" for a paper titled "{title}". '
            "Write in a natural, scholarly voice that demonstrates deep understanding."
        )

    if abstract:
        prompt += f' Context from the paper\'s abstract: "{abstract}"'
    if section.description:
        prompt += f" Focus on: {section.description}"
    if section.bullet_points:
        points = "\n".join(f"• {p}" for p in section.bullet_points)
        prompt += f" Overall key points for the entire section:\n{points}"
    if section.figures:
        described = "\n".join(f"• {f.description}" for f in section.figures if f.description)
        if described:
            prompt += f"\nRefer to these figures where relevant:\n{described}"

    word_count = ""
    if section.min_word_count:
        word_count = f" The content should be at least {section.min_word_count} words."

    prompt += (
        "\n\nWrite this section as a seasoned academic researcher would. Your writing should be:\n"
        "- Natural and engaging, not formulaic or robotic\n"
        "- Well-structured with smooth logical flow\n"
        "- Include citations naturally where they support your points, using the format "
        f"{format_marker('Brief reason')} when referencing prior work, methodologies, or "
        "specific claims\n\n"
        f"Write as much or as little as needed to thoroughly cover the topic.{word_count}"
    )
    return prompt


def build_abstract_prompt(paper_title: str, full_content: str) -> str:
    return (
        f'Write a comprehensive abstract for the academic paper titled "{paper_title}".\n\n'
        f"Full paper content:\n{full_content}\n\n"
        "Generate a well-structured abstract (150-250 words) that includes:\n"
        "- Brief background and motivation\n"
        "- Research objectives and methodology\n"
        "- Key findings and results\n"
        "- Main conclusions and implications\n\n"
        "Use formal academic language appropriate for scholarly publication."
    )


def build_caption_prompt(
    figure_description: str, section_title: str, paper_title: str, abstract: str
) -> str:
    prompt = (
        f'Write a brief, academic figure caption for: "{figure_description}".\n'
        f'Context: This figure is in the "{section_title}" section of a paper titled '
        f'"{_paper_title(paper_title)}".\n'
    )
    if abstract:
        prompt += f'Paper abstract: "{abstract}"\n'
    prompt += (
        "\nGenerate a concise, professional caption (1-2 sentences) that would be appropriate "
        "for an academic publication."
    )
    return prompt


def build_title_prompt(paper_title: str, context: str) -> str:
    return (
        "Based on the following academic paper content, suggest 5 alternative titles that are:\n"
        "- Clear and descriptive\n"
        "- Academically appropriate\n"
        "- Concise but informative\n"
        f'- Different from the current title: "{paper_title}"\n\n'
        f"Paper content:\n{context}\n\n"
        "Return only the 5 titles, one per line, without numbering or formatting."
    )


def build_rewrite_prompt(
    selected_text: str,
    section_title: str,
    paper_title: str,
    abstract: str,
    instructions: str | None = None,
) -> str:
    prompt = (
        "Rewrite the following text from an academic paper to improve it while maintaining "
        f'academic tone and accuracy: "{selected_text}"'
    )
    if instructions:
        prompt += f"\n\nSpecific instructions: {instructions}"
    prompt += (
        f'\n\nContext: This text is from the "{section_title}" section of a paper titled '
        f'"{_paper_title(paper_title)}".'
    )
    if abstract:
        prompt += f'\nPaper abstract: "{abstract}"'
    return prompt
