"""Prompt templates for the AI features."""

from __future__ import annotations

INSIGHTS_JSON_SHAPE = """{
  "salaryRanges": [
    { "role": "string", "min": number, "max": number, "median": number, "location": "string" }
  ],
  "growthRate": number,
  "demandLevel": "High" | "Medium" | "Low",
  "topSkills": ["skill1", "skill2"],
  "marketOutlook": "Positive" | "Neutral" | "Negative",
  "keyTrends": ["trend1", "trend2"],
  "recommendedSkills": ["skill1", "skill2"]
}"""

QUIZ_JSON_SHAPE = """{
  "questions": [
    {
      "question": "string",
      "options": ["string", "string", "string", "string"],
      "correctAnswer": "string",
      "explanation": "string"
    }
  ]
}"""

IMPROVEMENT_TIP_FALLBACK = "Focus on strengthening core fundamentals in your domain."


def industry_insights_prompt(industry: str) -> str:
    return f"""Analyze the current state of the {industry} industry and provide insights in ONLY the following JSON format without any additional notes or explanations:
{INSIGHTS_JSON_SHAPE}

IMPORTANT: Return ONLY the JSON. No additional text, notes, or markdown formatting.
Include at least 5 common roles for salary ranges.
Growth rate should be a percentage.
Include at least 5 skills and trends."""


def quiz_prompt(industry: str, skills: list[str], count: int = 10) -> str:
    skills_text = f" with expertise in {', '.join(skills)}" if skills else ""
    return f"""Generate {count} technical interview questions for a {industry} professional{skills_text}.
Each question should be multiple choice with 4 options.
Return ONLY this JSON (no notes, no markdown):
{QUIZ_JSON_SHAPE}"""


def improvement_tip_prompt(industry: str | None, wrong_answers: list[dict]) -> str:
    wrong_text = "\n\n".join(
        f'Question: "{q["question"]}"\nCorrect Answer: "{q["answer"]}"\nUser Answer: "{q["userAnswer"]}"'
        for q in wrong_answers
    )
    return f"""The user got the following {industry or "technical"} interview questions wrong:
{wrong_text}

Based on these, give 1 concise improvement tip (max 2 sentences).
Be encouraging and focus on what to learn/practice.
Do not explicitly mention the mistakes; focus on what to learn next."""


def cover_letter_prompt(
    job_title: str,
    company_name: str,
    job_description: str,
    industry: str | None,
    experience: int | None,
    skills: list[str],
    bio: str | None,
) -> str:
    return f"""Write a professional cover letter for a {job_title} position at {company_name}.

About the candidate:
- Industry: {industry or "Not specified"}
- Years of Experience: {experience if experience is not None else "Not specified"}
- Skills: {", ".join(skills) if skills else "Not specified"}
- Professional Background: {bio or "Not specified"}

Job Description:
{job_description}

Requirements:
1. Use a professional, enthusiastic tone
2. Highlight relevant skills and experience
3. Show understanding of the company's needs
4. Keep it concise (max 400 words)
5. Use proper business letter formatting in markdown
6. Include specific examples of achievements
7. Relate candidate's background to job requirements

Format the letter in markdown."""


def improve_resume_prompt(section_type: str, current: str, industry: str | None) -> str:
    return f"""You are a professional resume writer. Improve the following {section_type} section
for a {industry or "professional"} professional.

Current content: "{current}"

Guidelines:
- Use strong action verbs
- Add measurable results (%, $, numbers) where applicable
- Highlight relevant technical & industry skills
- Keep concise (max 3-4 sentences)
- Focus on achievements, not responsibilities
- Include industry-specific keywords
- For "Education", format as: [Degree], [Institution], [Year]

Return only the improved text. Do not include markdown, notes, or extra formatting."""
