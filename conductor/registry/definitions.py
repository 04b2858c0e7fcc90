"""
Built-in advisor roster.

Eight specialists covering product, design, frontend, backend, security,
QA, DevOps and code review. Dependencies express initialization order:
design builds on product, frontend on design, and so on.
"""

from typing import List

from conductor.registry.schemas import AdvisorDefinition


DEFAULT_ADVISOR_DEFINITIONS: List[AdvisorDefinition] = [
    AdvisorDefinition(
        name="@pm",
        role="Product Manager",
        expertise=(
            "Requirements gathering",
            "User story creation",
            "Roadmap planning",
            "Stakeholder communication",
            "Feature prioritization",
            "Market analysis",
        ),
        priority=8,
        dependencies=frozenset(),
        context_template="pm-context-template",
        special_instructions=(
            "Focus on business value and user needs",
            "Consider technical feasibility in recommendations",
            "Align features with overall product strategy",
        ),
        technical_stack=("Product Management", "Analytics", "User Research"),
    ),
    AdvisorDefinition(
        name="@design",
        role="UX/UI Designer",
        expertise=(
            "User experience design",
            "Interface design",
            "Accessibility compliance",
            "Design systems",
            "User research",
            "Prototyping",
        ),
        priority=7,
        dependencies=frozenset({"@pm"}),
        context_template="design-context-template",
        special_instructions=(
            "Ensure WCAG 2.1 AA compliance",
            "Design for mobile-first approach",
            "Consider user cognitive load and accessibility",
            "Focus on conversion optimization",
        ),
        technical_stack=("Figma", "Accessibility Guidelines", "Design Systems"),
    ),
    AdvisorDefinition(
        name="@frontend",
        role="Frontend Developer",
        expertise=(
            "React development",
            "Next.js applications",
            "TypeScript",
            "State management",
            "Performance optimization",
            "Modern web standards",
        ),
        priority=9,
        dependencies=frozenset({"@design"}),
        context_template="frontend-context-template",
        special_instructions=(
            "Focus on component reusability and maintainability",
            "Optimize for Core Web Vitals",
            "Follow established design system patterns",
            "Consider SEO and accessibility",
        ),
        technical_stack=("React", "Next.js", "TypeScript", "CSS-in-JS"),
    ),
    AdvisorDefinition(
        name="@backend",
        role="Backend Engineer",
        expertise=(
            "API design",
            "Database optimization",
            "Security patterns",
            "Performance tuning",
            "Microservices",
            "Authentication",
        ),
        priority=9,
        dependencies=frozenset(),
        context_template="backend-context-template",
        special_instructions=(
            "Follow OpenAPI specification standards",
            "Implement proper error handling and logging",
            "Ensure security best practices",
            "Optimize database queries and performance",
        ),
        technical_stack=("Node.js", "TypeScript", "Databases", "API Design"),
    ),
    AdvisorDefinition(
        name="@security",
        role="Security Expert",
        expertise=(
            "OWASP compliance",
            "Vulnerability assessment",
            "Secure coding",
            "Authentication & authorization",
            "Data protection",
            "Threat modeling",
        ),
        priority=8,
        dependencies=frozenset({"@backend"}),
        context_template="security-context-template",
        special_instructions=(
            "Enforce OWASP Top 10 security practices",
            "Review authentication and authorization flows",
            "Identify potential security vulnerabilities",
            "Ensure data protection compliance",
        ),
        technical_stack=("Security Frameworks", "OWASP", "Encryption", "Auth Systems"),
    ),
    AdvisorDefinition(
        name="@qa",
        role="Quality Assurance Engineer",
        expertise=(
            "Test strategy design",
            "Unit testing",
            "Integration testing",
            "E2E testing",
            "Test automation",
            "Quality metrics",
        ),
        priority=7,
        dependencies=frozenset({"@frontend", "@backend"}),
        context_template="qa-context-template",
        special_instructions=(
            "Implement comprehensive test coverage",
            "Design maintainable test suites",
            "Focus on critical user paths",
            "Ensure test reliability and speed",
        ),
        technical_stack=("Jest", "Playwright", "Testing Library", "Cypress"),
    ),
    AdvisorDefinition(
        name="@devops",
        role="DevOps Engineer",
        expertise=(
            "CI/CD pipelines",
            "Infrastructure management",
            "Deployment automation",
            "Monitoring & alerting",
            "Container orchestration",
            "Cloud platforms",
        ),
        priority=6,
        dependencies=frozenset({"@backend", "@frontend"}),
        context_template="devops-context-template",
        special_instructions=(
            "Optimize deployment pipelines for speed and reliability",
            "Implement comprehensive monitoring",
            "Ensure scalable infrastructure design",
            "Focus on automation and reproducibility",
        ),
        technical_stack=("Docker", "Kubernetes", "GitHub Actions", "Cloud Platforms"),
    ),
    AdvisorDefinition(
        name="@reviewer",
        role="Code Quality & Architecture Specialist",
        expertise=(
            "Code quality assessment",
            "Architecture patterns",
            "Technical debt analysis",
            "Best practices enforcement",
            "Integration patterns",
            "Performance review",
        ),
        priority=8,
        dependencies=frozenset(),
        context_template="reviewer-context-template",
        special_instructions=(
            "Enforce established coding standards",
            "Identify potential security vulnerabilities",
            "Suggest performance improvements",
            "Ensure maintainability and scalability",
        ),
        technical_stack=("Code Analysis", "Architecture Patterns", "Performance Tools"),
    ),
]
