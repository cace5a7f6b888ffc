"""Project templates matched against student profiles.

The templates span technologies, difficulty levels (1-5) and goal horizons so
that the recommendation engine can pick a diverse set.
"""

from intake_engine.domain.entities import ProjectTemplate


PROJECT_TEMPLATES: tuple[ProjectTemplate, ...] = (
    # Short-term beginner projects (difficulty 1-2)
    ProjectTemplate(
        id="task-tracker",
        title="Task Tracker with Local Storage",
        description=(
            "Build a task management app that persists data in the browser. Users can add, "
            "edit, delete, and mark tasks complete. Features filtering by status and a "
            "clean, responsive UI."
        ),
        learning_outcomes=(
            "Master DOM manipulation and event handling",
            "Understand browser storage APIs (localStorage)",
            "Practice state management in vanilla JavaScript",
            "Learn responsive CSS layout techniques",
        ),
        tech_stack=("HTML", "CSS", "JavaScript", "LocalStorage API"),
        deliverables=(
            "Functional task CRUD interface",
            "Data persistence across sessions",
            "Filter/sort functionality",
            "Mobile-responsive design",
        ),
        supporting_resources=(
            "MDN Web Storage API docs",
            "JavaScript array methods (map, filter, reduce)",
            "CSS Flexbox and Grid layouts",
            "Event delegation patterns",
        ),
        difficulty=1,
        related_interests=("web-development", "frontend", "javascript"),
        skills_covered=("js_basics", "dom_manipulation", "html_css", "browser_apis"),
        goal_horizon="short",
        category="web",
    ),
    ProjectTemplate(
        id="weather-dashboard",
        title="Weather Dashboard with API Integration",
        description=(
            "Create a weather dashboard that fetches real-time weather data from a public "
            "API. Display current conditions, 5-day forecast, and location search. Handle "
            "loading states and errors gracefully."
        ),
        learning_outcomes=(
            "Learn to consume REST APIs with fetch()",
            "Handle asynchronous JavaScript (Promises/async-await)",
            "Implement error handling and loading states",
            "Work with JSON data transformation",
        ),
        tech_stack=("HTML", "CSS", "JavaScript", "OpenWeather API", "Fetch API"),
        deliverables=(
            "Location search with autocomplete",
            "Current weather display with icons",
            "5-day forecast visualization",
            "Error handling for API failures",
        ),
        supporting_resources=(
            "Fetch API and async/await patterns",
            "OpenWeather API documentation",
            "JSON parsing and data transformation",
            "Loading spinner and error UI patterns",
        ),
        difficulty=2,
        related_interests=("web-development", "apis", "javascript"),
        skills_covered=("js_async", "api_consumption", "http_basics", "json"),
        goal_horizon="short",
        category="web",
    ),
    ProjectTemplate(
        id="portfolio-site",
        title="Personal Portfolio with Blog",
        description=(
            "Build a professional portfolio website showcasing your projects, skills, and "
            "blog posts. Implement a static site with routing, responsive design, and SEO "
            "optimization."
        ),
        learning_outcomes=(
            "Master semantic HTML and accessibility",
            "Learn CSS layout and animation techniques",
            "Understand static site generation concepts",
            "Practice content structure and SEO basics",
        ),
        tech_stack=("HTML", "CSS", "JavaScript", "Markdown", "Git Pages or Vercel"),
        deliverables=(
            "Home page with project showcase",
            "About page with skills/experience",
            "Blog section with markdown rendering",
            "Contact form with validation",
        ),
        supporting_resources=(
            "Semantic HTML elements",
            "CSS animations and transitions",
            "Markdown syntax and parsers",
            "SEO meta tags and Open Graph",
        ),
        difficulty=2,
        related_interests=("web-development", "design", "frontend"),
        skills_covered=("html_css", "responsive_design", "git_basics", "deployment"),
        goal_horizon="short",
        category="web",
    ),
    # Short/medium-term intermediate projects (difficulty 3)
    ProjectTemplate(
        id="recipe-app-react",
        title="Recipe Finder with React and Context API",
        description=(
            "Build a recipe discovery app using React. Users can search recipes, save "
            "favorites, view detailed instructions, and create shopping lists. Implement "
            "client-side routing and global state management."
        ),
        learning_outcomes=(
            "Master React fundamentals (components, props, state)",
            "Learn Context API for global state management",
            "Implement React Router for navigation",
            "Practice component composition patterns",
        ),
        tech_stack=("React", "React Router", "Context API", "Spoonacular API", "CSS Modules"),
        deliverables=(
            "Recipe search with filtering",
            "Recipe detail view with instructions",
            "Favorites system with persistence",
            "Shopping list generator",
        ),
        supporting_resources=(
            "React hooks (useState, useEffect, useContext)",
            "React Router navigation patterns",
            "Component design patterns",
            "API integration in React",
        ),
        difficulty=3,
        related_interests=("web-development", "react", "frontend", "apis"),
        skills_covered=("react_basics", "react_hooks", "state_management", "routing"),
        goal_horizon="medium",
        category="web",
    ),
    ProjectTemplate(
        id="chat-app-websocket",
        title="Real-time Chat Application with WebSockets",
        description=(
            "Create a real-time chat app where users can join rooms, send messages, and "
            "see who's online. Implement WebSocket communication, user authentication, and "
            "message persistence."
        ),
        learning_outcomes=(
            "Understand WebSocket protocol and real-time communication",
            "Implement user authentication with JWT",
            "Learn event-driven architecture",
            "Practice full-stack development (client + server)",
        ),
        tech_stack=("React", "Node.js", "Socket.io", "Express", "MongoDB", "JWT"),
        deliverables=(
            "User authentication (signup/login)",
            "Real-time message broadcast",
            "Multiple chat rooms",
            "Online user presence indicators",
        ),
        supporting_resources=(
            "WebSocket vs HTTP comparison",
            "Socket.io documentation",
            "JWT authentication patterns",
            "MongoDB schema design",
        ),
        difficulty=3,
        related_interests=("web-development", "full-stack", "backend", "real-time"),
        skills_covered=("websockets", "authentication", "node_basics", "database_basics"),
        goal_horizon="medium",
        category="full-stack",
    ),
    ProjectTemplate(
        id="ecommerce-cart",
        title="E-commerce Product Catalog with Cart",
        description=(
            "Build an online store with product listings, search/filter, shopping cart, and "
            "checkout flow. Implement Redux for state management, form validation, and "
            "payment integration."
        ),
        learning_outcomes=(
            "Master Redux for complex state management",
            "Implement advanced form handling and validation",
            "Learn payment gateway integration (Stripe)",
            "Practice product catalog patterns",
        ),
        tech_stack=("React", "Redux", "React Hook Form", "Stripe", "Node.js", "PostgreSQL"),
        deliverables=(
            "Product catalog with search/filter",
            "Shopping cart with quantity management",
            "Checkout flow with validation",
            "Order confirmation and history",
        ),
        supporting_resources=(
            "Redux toolkit documentation",
            "Stripe payment integration guide",
            "Form validation best practices",
            "E-commerce UX patterns",
        ),
        difficulty=3,
        related_interests=("web-development", "full-stack", "react", "ecommerce"),
        skills_covered=("redux", "forms", "payment_integration", "database_design"),
        goal_horizon="medium",
        category="full-stack",
    ),
    # Medium/long-term advanced projects (difficulty 4-5)
    ProjectTemplate(
        id="social-platform",
        title="Social Media Platform with Feed Algorithm",
        description=(
            "Create a social platform where users can post updates, follow others, "
            "like/comment, and receive a personalized feed. Implement user profiles, image "
            "uploads, notifications, and a basic recommendation algorithm."
        ),
        learning_outcomes=(
            "Design scalable database schemas with relationships",
            "Implement authentication and authorization (RBAC)",
            "Build recommendation/ranking algorithms",
            "Learn image upload and storage (S3 or Cloudinary)",
        ),
        tech_stack=("Next.js", "TypeScript", "PostgreSQL", "Prisma", "NextAuth.js", "AWS S3", "Redis"),
        deliverables=(
            "User profiles with followers/following",
            "Post creation with image uploads",
            "Personalized feed with ranking",
            "Real-time notifications system",
        ),
        supporting_resources=(
            "Database normalization and relationships",
            "Feed ranking algorithms",
            "Image optimization and CDN usage",
            "Redis for caching and sessions",
        ),
        difficulty=4,
        related_interests=("web-development", "full-stack", "backend", "social-media", "algorithms"),
        skills_covered=("database_advanced", "caching", "file_upload", "algorithms", "scalability"),
        goal_horizon="long",
        category="full-stack",
    ),
    ProjectTemplate(
        id="project-management-saas",
        title="Team Project Management SaaS",
        description=(
            "Build a project management tool (Trello/Asana clone) with teams, projects, "
            "tasks, and real-time collaboration. Implement drag-and-drop, role-based "
            "permissions, activity feeds, and analytics."
        ),
        learning_outcomes=(
            "Master complex state management at scale",
            "Implement drag-and-drop interfaces",
            "Learn multi-tenancy architecture",
            "Build analytics dashboards with data visualization",
        ),
        tech_stack=(
            "Next.js", "TypeScript", "PostgreSQL", "Prisma", "tRPC", "React Query",
            "Recharts", "dnd-kit",
        ),
        deliverables=(
            "Team and project management",
            "Kanban board with drag-and-drop",
            "Task assignment and tracking",
            "Analytics dashboard with charts",
        ),
        supporting_resources=(
            "Multi-tenancy design patterns",
            "Drag-and-drop library documentation",
            "Data visualization best practices",
            "Performance optimization for large datasets",
        ),
        difficulty=5,
        related_interests=("web-development", "full-stack", "saas", "productivity"),
        skills_covered=("multi_tenancy", "complex_ui", "data_visualization", "performance"),
        goal_horizon="long",
        category="full-stack",
    ),
    ProjectTemplate(
        id="ai-content-generator",
        title="AI-Powered Content Generation Platform",
        description=(
            "Create a SaaS platform that uses AI (OpenAI/Anthropic APIs) to generate "
            "content (blog posts, social media, emails). Implement subscription billing, "
            "usage tracking, content templates, and a WYSIWYG editor."
        ),
        learning_outcomes=(
            "Integrate AI APIs (OpenAI, Anthropic Claude)",
            "Implement subscription billing (Stripe)",
            "Build usage-based rate limiting",
            "Learn prompt engineering and AI UX patterns",
        ),
        tech_stack=(
            "Next.js", "TypeScript", "Anthropic API", "Stripe", "PostgreSQL",
            "Vercel AI SDK", "Tiptap Editor",
        ),
        deliverables=(
            "AI content generation interface",
            "Content templates and customization",
            "Subscription tiers with usage limits",
            "Rich text editor for refinement",
        ),
        supporting_resources=(
            "Anthropic Claude API docs",
            "Prompt engineering best practices",
            "Stripe subscription billing guide",
            "Rate limiting strategies",
        ),
        difficulty=5,
        related_interests=("web-development", "ai", "saas", "full-stack"),
        skills_covered=("ai_integration", "subscription_billing", "rate_limiting", "prompt_engineering"),
        goal_horizon="long",
        category="full-stack",
    ),
    ProjectTemplate(
        id="mobile-fitness-tracker",
        title="Cross-Platform Fitness Tracker Mobile App",
        description=(
            "Build a mobile fitness app with workout tracking, progress charts, social "
            "features, and offline support. Implement device sensors (pedometer), push "
            "notifications, and data sync."
        ),
        learning_outcomes=(
            "Learn React Native for cross-platform mobile development",
            "Work with device APIs (camera, sensors, location)",
            "Implement offline-first architecture",
            "Master mobile app deployment (App Store/Play Store)",
        ),
        tech_stack=("React Native", "Expo", "TypeScript", "SQLite", "Firebase", "React Navigation"),
        deliverables=(
            "Workout logging with exercise library",
            "Progress tracking with charts",
            "Social feed and challenges",
            "Offline mode with sync",
        ),
        supporting_resources=(
            "React Native documentation",
            "Expo sensor APIs",
            "Offline-first architecture patterns",
            "App store deployment guides",
        ),
        difficulty=4,
        related_interests=("mobile", "react-native", "fitness", "cross-platform"),
        skills_covered=("react_native", "mobile_apis", "offline_storage", "push_notifications"),
        goal_horizon="long",
        category="mobile",
    ),
    ProjectTemplate(
        id="data-analytics-dashboard",
        title="Business Analytics Dashboard with ETL Pipeline",
        description=(
            "Create a data analytics platform that ingests data from multiple sources "
            "(APIs, CSV, databases), transforms it, and visualizes insights. Implement "
            "scheduled jobs, data warehousing, and interactive charts."
        ),
        learning_outcomes=(
            "Learn ETL (Extract, Transform, Load) patterns",
            "Work with data processing libraries (Pandas-equivalent)",
            "Build interactive data visualizations",
            "Implement scheduled background jobs",
        ),
        tech_stack=("Next.js", "TypeScript", "PostgreSQL", "Node.js", "Recharts", "BullMQ", "Prisma"),
        deliverables=(
            "Multi-source data connectors",
            "ETL pipeline with transformations",
            "Interactive dashboard with filters",
            "Scheduled data refresh jobs",
        ),
        supporting_resources=(
            "ETL architecture patterns",
            "Data transformation techniques",
            "Chart.js / Recharts documentation",
            "Job queue systems (Bull, BullMQ)",
        ),
        difficulty=4,
        related_interests=("data", "analytics", "backend", "visualization"),
        skills_covered=("etl", "data_processing", "background_jobs", "data_visualization"),
        goal_horizon="long",
        category="data",
    ),
    ProjectTemplate(
        id="devops-ci-cd",
        title="CI/CD Pipeline and Infrastructure as Code",
        description=(
            "Set up a complete DevOps pipeline with automated testing, deployment, "
            "monitoring, and infrastructure provisioning. Use Docker, GitHub Actions, "
            "Terraform, and cloud services (AWS/GCP)."
        ),
        learning_outcomes=(
            "Master containerization with Docker",
            "Learn Infrastructure as Code (Terraform)",
            "Implement CI/CD with GitHub Actions",
            "Set up monitoring and logging (Datadog, LogRocket)",
        ),
        tech_stack=("Docker", "GitHub Actions", "Terraform", "AWS/GCP", "Kubernetes", "Nginx"),
        deliverables=(
            "Dockerized application with multi-stage builds",
            "GitHub Actions workflows for CI/CD",
            "Terraform scripts for infrastructure",
            "Monitoring dashboards and alerts",
        ),
        supporting_resources=(
            "Docker best practices",
            "GitHub Actions workflow syntax",
            "Terraform AWS provider docs",
            "Monitoring and observability principles",
        ),
        difficulty=4,
        related_interests=("devops", "infrastructure", "cloud", "automation"),
        skills_covered=("docker", "ci_cd", "terraform", "cloud_services", "monitoring"),
        goal_horizon="long",
        category="devops",
    ),
    ProjectTemplate(
        id="blockchain-dapp",
        title="Decentralized App (DApp) on Ethereum",
        description=(
            "Build a decentralized application on Ethereum with smart contracts. Create an "
            "NFT marketplace, DAO voting system, or DeFi protocol. Implement wallet "
            "integration, contract deployment, and Web3 interactions."
        ),
        learning_outcomes=(
            "Learn Solidity for smart contract development",
            "Understand blockchain fundamentals and gas optimization",
            "Work with Web3 libraries (ethers.js, wagmi)",
            "Implement wallet connections (MetaMask)",
        ),
        tech_stack=("Solidity", "Hardhat", "React", "ethers.js", "IPFS", "OpenZeppelin"),
        deliverables=(
            "Smart contracts with unit tests",
            "Web3 frontend with wallet integration",
            "Contract deployment to testnet",
            "IPFS integration for decentralized storage",
        ),
        supporting_resources=(
            "Solidity documentation",
            "Hardhat development environment",
            "Web3 modal and wagmi hooks",
            "Gas optimization techniques",
        ),
        difficulty=5,
        related_interests=("blockchain", "web3", "crypto", "decentralization"),
        skills_covered=("solidity", "smart_contracts", "web3", "blockchain"),
        goal_horizon="long",
        category="blockchain",
    ),
    ProjectTemplate(
        id="game-development",
        title="Browser-Based Multiplayer Game",
        description=(
            "Create a real-time multiplayer game in the browser using WebGL or Canvas. "
            "Implement game physics, collision detection, player synchronization, and "
            "leaderboards."
        ),
        learning_outcomes=(
            "Learn game development fundamentals",
            "Implement game physics and collision detection",
            "Build real-time multiplayer synchronization",
            "Work with Canvas or WebGL rendering",
        ),
        tech_stack=("TypeScript", "Canvas API or Three.js", "Socket.io", "Node.js", "Matter.js"),
        deliverables=(
            "Game loop with physics engine",
            "Multiplayer synchronization",
            "Player controls and animations",
            "Leaderboard and matchmaking",
        ),
        supporting_resources=(
            "Game development patterns",
            "Canvas rendering techniques",
            "Physics engine documentation",
            "Multiplayer game networking",
        ),
        difficulty=5,
        related_interests=("game-dev", "graphics", "multiplayer", "physics"),
        skills_covered=("game_loop", "physics", "rendering", "real_time_sync"),
        goal_horizon="long",
        category="game",
    ),
)


def get_template_by_id(template_id: str) -> ProjectTemplate | None:
    return next((t for t in PROJECT_TEMPLATES if t.id == template_id), None)
