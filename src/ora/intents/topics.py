"""Topic response table and keyword topic detection.

Static content: the canned replies for each topic and the keywords that
route free text to a topic. Both tables are ordered; keyword detection
returns the first topic in declaration order.
"""

FALLBACK_RESPONSE = "Thank you for asking. I am thinking... hmm..."

_HEALTH_RESPONSE = (
    "AI applications in health and fitness range from personalized training to predictive "
    "health analytics. Recent studies show AI-driven interventions improve outcomes by 40%. "
    "Are you interested in specific applications or research findings? "
    "[mitsloan.mit.edu/when-humans-and-ai-work-best-together]"
    "(https://mitsloan.mit.edu/ideas-made-to-matter/when-humans-and-ai-work-best-together-and-when-each-better-alone)"
    " by Brian Eastwood, Feb 3, 2025"
)

_HOUSE_RESOLUTION_719 = (
    "House Resolution 719 reminds us of our service to civil discussion and healthy debate. "
    "[US Congress](https://www.congress.gov/bill/119th-congress/house-resolution/719/text?utm_source=copilot.com)"
)

TOPIC_RESPONSES: dict[str, str] = {
    "Applied AI for Transformation": (
        "Let me share insights from MIT research on AI transformation. Organizations that "
        "successfully adopt AI focus on three key areas: workforce readiness, governance "
        "frameworks, and measurable outcomes. I recommend this course: "
        "[Online Program: Agentic AI & Organizational Transformation]"
        "(https://online.professionalprogramsmit.com/agentic-ai-organizational-transformation)"
    ),
    "USMC Knowledge Management": (
        "The USMC approach to knowledge management emphasizes rapid information sharing and "
        "decision-making under uncertainty. Their framework integrates AI to enhance situational "
        "awareness. I suggest this document: [NAVMC-3000.1SECURED.pdf]"
        "(https://naskxuojfdqcunotdjzi.supabase.co/storage/v1/object/public/make-3504d096-videos/NAVMC-3000.1SECURED.pdf)"
    ),
    "Human Health & Fitness": _HEALTH_RESPONSE,
    "Human Health": _HEALTH_RESPONSE,
    "Frameworks for Innovation": (
        "Innovation frameworks provide structured approaches to AI adoption. The most effective "
        "combine agile methodologies with design thinking and continuous learning. Would you "
        "like to explore specific frameworks?\n\n"
        "This can help any leader ask better AI questions: [Harvard 2025 C-Level Assessment]"
        "(https://www.harvardbusiness.org/wp-content/uploads/2025/10/CRE6997_ENT_CLevel_Assessment_Oct2025.pdf)"
        "\n\nI suggest this resource: [NIST AI Risk Management Framework]"
        "(https://www.nist.gov/itl/ai-risk-management-framework)"
    ),
    "AI Blind Spots & Pitfalls": (
        "Common AI blind spots include bias in training data, over-reliance on automation, and "
        "lack of human oversight. Organizations need governance structures to identify and "
        "mitigate these risks.\n\n"
        "Leaders must ask critical questions: What level of accuracy is truly required? Can "
        "lower-cost models achieve the same outcome? Should systems be air-gapped for privacy "
        "or distributed across multi-cloud environments for resilience and sustainability? "
        "Have we created risk by becoming dependent on consultants or vendor lock-in? What Key "
        "Performance Indicators (KPI) will be used to measure AI investment?\n\n"
        "History shows what happens when organizations fail to evolve. Amazon moved from pilots "
        "to drone delivery while competitors hesitated. Blockbuster once had 9,000 stores and "
        "$6B in revenue, yet its failure to adapt left only one store standing today.\n\n"
        "The lesson is clear: the greatest danger lies in not evolving. The risks include loss "
        "of consumer confidence, loss of funding, and loss of competitive advantage, all of "
        "which can be far more costly than adopting AI in the first place. What specific "
        "challenges are you facing?\n\n"
        "I recommend this IBM resource: [Year of Agentic AI Takes Center Stage in 2025]"
        "(https://www.ibm.com/think/news/year-agentic-ai-center-stage-2025)"
    ),
    "Governance & Workforce Readiness": (
        "Effective AI governance balances innovation with risk management. Workforce readiness "
        "requires upskilling, change management, and clear role definitions using frameworks "
        "like RACI. Get a template and get started! "
        "[https://www.smartsheet.com/content/raci-templates-excel]"
        "(https://www.smartsheet.com/content/raci-templates-excel)"
    ),
    "ROI": (
        "Return on Investment (ROI) is a simple way to measure how much value you get back "
        "compared to what you put in. It's used in business, finance, marketing, training "
        "programs, and even personal decisions."
    ),
    "KPI & ROI": (
        "An AI Governance KPI Dashboard builds trust, strengthens transparency and maximizes "
        "return on investment by giving leaders a clear view of model reliability, data-drift "
        "incidents, fairness audit coverage, and overall operational performance. Key metrics "
        "include: Operational Maintenance & Consumption Cost, Model Reliability, Data Drift "
        "Incidents, Fairness Audit Coverage, Transparency Measurement, IT Spending on Applied "
        "AI, and AI Workforce Training & Readiness. I suggest this resource: "
        "[STATE OF AI IN BUSINESS 2025]"
        "(https://mlq.ai/media/quarterly_decks/v0.1_State_of_AI_in_Business_2025_Report.pdf)"
    ),
    "Training": (
        "Effective AI training programs combine technical skills with practical application. "
        "Research shows that hands-on learning with real-world scenarios increases retention "
        "by 60%.\n\n"
        "Check out: [The 5 Skill Sets Leaders Must Develop in the AI Era]"
        "(https://www.forbes.com/councils/forbescoachescouncil/2026/01/07/the-5-skill-sets-leaders-must-develop-in-the-ai-era/)"
        " - Forbes article on essential AI skills.\n\n"
        "For free AI leadership training, and a personalized agent like this one, check out: "
        "[https://agent.myora.now](https://agent.myora.now)"
    ),
    "Next Live Q & A": (
        "Let's make an appointment! Click [Calendly.com/caraz007](https://calendly.com/caraz007)"
        "\n\nMy personal AI avatar makes the introduction and helps me stay organized! We can "
        "talk about free AI leadership training, Agentic AI, measurable change and learn how "
        "you can get a personalized agent just like this one!"
    ),
    "RACI": (
        "RACI Matrix is a powerful governance framework that clarifies roles and "
        "responsibilities. It stands for: Responsible, Accountable, Consulted, and Informed. "
        "For AI projects, RACI helps prevent confusion about who owns decisions, who needs to "
        "be informed, and who should be consulted. Get free RACI template: "
        "www.smartsheet.com/content/raci-templates-excel"
    ),
    "Governance": (
        "AI governance frameworks establish clear accountability, ethical guidelines, and risk "
        "management protocols.\n\n"
        "Key components include: decision rights, oversight mechanisms, compliance standards, "
        "and continuous monitoring.\n\n"
        "Explore best practices: mitsloan.mit.edu/ai-governance-what-is-it-and-why"
    ),
    "Bias": (
        "AI bias occurs when algorithms produce systematically prejudiced results due to flawed "
        "training data or design assumptions.\n\n"
        "Mitigation strategies include: diverse training data, regular audits, human oversight, "
        "and transparency in decision-making.\n\n"
        "Deep dive into AI bias: ibm.com/topics/ai-bias"
    ),
    "Risk": (
        "AI risk management involves identifying, assessing, and mitigating potential harms "
        "from AI systems.\n\n"
        "Critical risk areas: data privacy, security vulnerabilities, model drift, ethical "
        "concerns, and regulatory compliance.\n\n"
        "Framework guide: nist.gov/ai-risk-management-framework"
    ),
    "Report": (
        "This report summarizes observation(s) recorded on January 6, 2026. The observations "
        "are categorized into areas for improvement or practices to sustain. Specific "
        "objectives during this observation include:\n"
        "• [objective]\n• [objective]\n• [objective]"
    ),
    "Leadership": _HOUSE_RESOLUTION_719,
    "Open Government Act": (
        "The Open Government requires Machine-Readable Data: Open Government data assets made "
        "available by all agencies. [https://www.congress.gov/bill/115th-congress/house-bill/1770/text]"
        "(https://www.congress.gov/bill/115th-congress/house-bill/1770/text)"
    ),
    "AI Trends": (
        "Here are the latest AI insights from our configured sources:\n\n"
        "📊 **Forbes AI 50** - Leading companies transforming industries with artificial "
        "intelligence\n[Forbes AI 50 List](https://www.forbes.com/lists/ai50/)\n\n"
        "🔬 **MIT Technology Review - AI Section** - Deep, technical, and ethical AI reporting "
        "from MIT's respected publication\n"
        "[MIT Tech Review AI](https://www.technologyreview.com/topic/artificial-intelligence/)"
        "\n\nThese sources provide cutting-edge insights on AI innovation, emerging "
        "technologies, and industry transformation. What specific AI trend interests you?"
    ),
}

TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Applied AI for Transformation": (
        "transformation", "digital transformation", "ai adoption", "mit", "arnold",
    ),
    "USMC Knowledge Management": ("usmc", "marine", "knowledge management", "cwo", "john"),
    "Human Health & Fitness": ("health", "fitness", "wellness", "medical", "healthcare"),
    "Frameworks for Innovation": ("framework", "innovation", "agile", "design thinking", "mike"),
    "AI Blind Spots & Pitfalls": (
        "blind spot", "pitfall", "risk", "threat", "vulnerability", "bias", "biased",
    ),
    "Governance & Workforce Readiness": (
        "governance", "oversight", "compliance", "policy", "regulation", "workforce", "readiness",
    ),
    "ROI": ("roi", "return on investment"),
    "KPI & ROI": ("kpi", "metric", "dashboard", "performance"),
    "Training": ("training", "learning", "education", "course", "workshop", "skill"),
    "Next Live Q & A": ("live", "q&a", "question", "appointment", "calendly", "meeting"),
    "RACI": ("raci", "responsible", "accountable", "consulted", "informed", "matrix"),
    "Report": ("report", "observation", "summary", "objective"),
    "Open Government Act": (
        "open government act", "open government", "budget", "roi",
        "machine readable", "machine-readable",
    ),
}

# Sent a while after the pill reply for these categories.
FOLLOW_UPS: dict[str, str] = {
    "USMC Knowledge Management": _HOUSE_RESOLUTION_719,
    "Training": (
        "Additional Resource: The 5 Growth Skills That Matter Most When Working With AI in "
        "2026 - Forbes article on essential AI skills.\n\n"
        "https://www.forbes.com/sites/dianehamilton/2026/01/03/"
        "the-5-growth-skills-that-matter-most-when-working-with-ai-in-2026"
    ),
}

PILL_BUTTONS: tuple[str, ...] = ("Leadership", "Training", "Human Health", "AI Trends", "News")

LEADER_QUESTION_RESPONSE = (
    "📊 Leaders asking the right questions is critical for organizational success. Check out "
    "this Harvard Business resource on C-Level Assessment: "
    "https://www.harvardbusiness.org/wp-content/uploads/2025/10/CRE6997_ENT_CLevel_Assessment_Oct2025.pdf"
)

AGILE_RESPONSE = (
    "Agile is a way of working that helps teams deliver work faster, more flexibly, and with "
    "continuous improvement. It started in software development but is now used across "
    "government, business, and even military planning because it adapts quickly to change. "
    "I recommend this free course for Agile AI training: [AI Agility: Comprehensive "
    "Introduction](https://resources.scrumalliance.org/Course/ai-agility-comprehensive-introduction)"
)


def lookup(topic: str) -> str:
    """Canned reply for a topic, or the generic reply when the topic is unknown."""
    return TOPIC_RESPONSES.get(topic, FALLBACK_RESPONSE)


def detect_keyword_topic(query: str) -> str | None:
    """Return the first topic whose keywords occur in the query.

    Matching is a case-insensitive substring test, so "policy" also hits
    "policymaking". Topics are tried in ``TOPIC_KEYWORDS`` order.
    """
    query_lower = query.lower()
    for topic, keywords in TOPIC_KEYWORDS.items():
        if any(keyword in query_lower for keyword in keywords):
            return topic
    return None
