"""Static catalog of well-known public repositories rounds are drawn from."""

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class RepositoryRef:
    owner: str
    name: str
    primary_language: str
    blurb: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


REPOSITORIES: tuple[RepositoryRef, ...] = (
    # Mixed
    RepositoryRef(
        "lodash", "lodash", "JavaScript",
        "A modern JavaScript utility library delivering modularity, performance, & extras.",
    ),
    RepositoryRef(
        "facebook", "react", "JavaScript",
        "A declarative, efficient, and flexible JavaScript library for building user interfaces.",
    ),
    RepositoryRef(
        "expressjs", "express", "JavaScript",
        "Fast, unopinionated, minimalist web framework for Node.js",
    ),
    RepositoryRef(
        "axios", "axios", "JavaScript",
        "Promise based HTTP client for the browser and node.js",
    ),
    RepositoryRef("nodejs", "node", "JavaScript", "Node.js JavaScript runtime"),
    RepositoryRef("vercel", "next.js", "JavaScript", "The React Framework"),
    RepositoryRef(
        "vuejs", "vue", "JavaScript",
        "Progressive, incrementally-adoptable JavaScript framework for building web UIs.",
    ),
    RepositoryRef(
        "tailwindlabs", "tailwindcss", "JavaScript",
        "A utility-first CSS framework for rapid UI development.",
    ),
    RepositoryRef(
        "tensorflow", "tensorflow", "Python",
        "An open source machine learning framework for everyone",
    ),
    RepositoryRef(
        "pytorch", "pytorch", "Python",
        "Tensors and Dynamic neural networks in Python with strong GPU acceleration",
    ),
    RepositoryRef(
        "django", "django", "Python",
        "The Web framework for perfectionists with deadlines.",
    ),
    RepositoryRef(
        "pallets", "flask", "Python",
        "The Python micro framework for building web applications.",
    ),
    RepositoryRef(
        "rust-lang", "rust", "Rust",
        "Empowering everyone to build reliable and efficient software.",
    ),
    RepositoryRef("golang", "go", "Go", "The Go programming language"),
    RepositoryRef(
        "spring-projects", "spring-boot", "Java",
        "Create Spring-powered, production-grade applications and services.",
    ),
    RepositoryRef("laravel", "laravel", "PHP", "A PHP framework for web artisans"),
    RepositoryRef(
        "dotnet", "aspnetcore", "C#",
        "Cross-platform .NET framework for building modern cloud-based web applications.",
    ),
    RepositoryRef(
        "kubernetes", "kubernetes", "Go",
        "Production-Grade Container Scheduling and Management",
    ),
    RepositoryRef(
        "rails", "rails", "Ruby",
        "Full-stack web framework optimized for programmer happiness.",
    ),
    RepositoryRef("redis", "redis", "C", "An in-memory database that persists on disk."),
    # JavaScript/TypeScript
    RepositoryRef("angular", "angular", "TypeScript", "The modern web developer's platform"),
    RepositoryRef("sveltejs", "svelte", "TypeScript", "Cybernetically enhanced web apps"),
    RepositoryRef(
        "facebook", "react-native", "JavaScript",
        "A framework for building native applications using React",
    ),
    RepositoryRef(
        "reduxjs", "redux", "TypeScript",
        "Predictable state container for JavaScript apps",
    ),
    RepositoryRef(
        "storybookjs", "storybook", "TypeScript",
        "The UI component explorer for React, Vue, Angular, Svelte and more.",
    ),
    RepositoryRef(
        "nestjs", "nest", "TypeScript",
        "Progressive Node.js framework for efficient, scalable server-side applications.",
    ),
    RepositoryRef(
        "gatsbyjs", "gatsby", "TypeScript",
        "Build blazing fast, modern apps and websites with React",
    ),
    RepositoryRef("nuxt", "nuxt", "TypeScript", "The Intuitive Vue Framework"),
    RepositoryRef("remix-run", "remix", "TypeScript", "Build better websites with Remix"),
    RepositoryRef(
        "prisma", "prisma", "TypeScript",
        "Next-generation ORM for Node.js & TypeScript",
    ),
    # Python
    RepositoryRef("scikit-learn", "scikit-learn", "Python", "Machine Learning in Python"),
    RepositoryRef(
        "pandas-dev", "pandas", "Python",
        "Flexible and powerful data analysis / manipulation library for Python",
    ),
    RepositoryRef(
        "numpy", "numpy", "Python",
        "The fundamental package for scientific computing with Python",
    ),
    RepositoryRef("matplotlib", "matplotlib", "Python", "Matplotlib: visualization with Python"),
    RepositoryRef(
        "fastapi", "fastapi", "Python",
        "FastAPI framework, high performance, easy to learn, fast to code, ready for production",
    ),
    RepositoryRef(
        "huggingface", "transformers", "Python",
        "State-of-the-art machine learning for PyTorch, TensorFlow, and JAX.",
    ),
    RepositoryRef("psf", "requests", "Python", "A simple, yet elegant, HTTP library for Python."),
    RepositoryRef(
        "scrapy", "scrapy", "Python",
        "Scrapy, a fast high-level web crawling & scraping framework for Python.",
    ),
    RepositoryRef(
        "pytest-dev", "pytest", "Python",
        "Makes it easy to write small tests, yet scales to complex functional testing.",
    ),
    # Java
    RepositoryRef(
        "elastic", "elasticsearch", "Java",
        "Free and Open, Distributed, RESTful Search Engine",
    ),
    RepositoryRef("apache", "kafka", "Java", "Mirror of Apache Kafka"),
    RepositoryRef("google", "guava", "Java", "Google core libraries for Java"),
    RepositoryRef("square", "retrofit", "Java", "A type-safe HTTP client for Android and the JVM"),
    RepositoryRef(
        "square", "okhttp", "Java",
        "Square's meticulous HTTP client for the JVM, Android, and GraalVM.",
    ),
    RepositoryRef("apache", "hadoop", "Java", "Apache Hadoop"),
    RepositoryRef("spring-projects", "spring-framework", "Java", "Spring Framework"),
    RepositoryRef("ReactiveX", "RxJava", "Java", "RxJava - Reactive Extensions for the JVM"),
    RepositoryRef("junit-team", "junit5", "Java", "The next generation of JUnit."),
    RepositoryRef(
        "netty", "netty", "Java",
        "Netty project - an event-driven asynchronous network application framework",
    ),
    # Go
    RepositoryRef(
        "gin-gonic", "gin", "Go",
        "HTTP web framework written in Go with a Martini-like API.",
    ),
    RepositoryRef("gofiber", "fiber", "Go", "Express inspired web framework written in Go"),
    RepositoryRef(
        "moby", "moby", "Go",
        "Collaborative project for assembling container-based systems.",
    ),
    RepositoryRef(
        "etcd-io", "etcd", "Go",
        "Distributed reliable key-value store for the most critical data of a distributed system",
    ),
    RepositoryRef(
        "hashicorp", "terraform", "Go",
        "Safely and predictably create, change, and improve infrastructure.",
    ),
    RepositoryRef(
        "prometheus", "prometheus", "Go",
        "The Prometheus monitoring system and time series database.",
    ),
    RepositoryRef(
        "cockroachdb", "cockroach", "Go",
        "CockroachDB - the open source, cloud-native distributed SQL database.",
    ),
    RepositoryRef("traefik", "traefik", "Go", "The Cloud Native Application Proxy"),
    RepositoryRef(
        "gohugoio", "hugo", "Go",
        "The world's fastest framework for building websites.",
    ),
    RepositoryRef(
        "grafana", "grafana", "Go",
        "The open and composable observability and data visualization platform.",
    ),
    # Rust
    RepositoryRef("denoland", "deno", "Rust", "A modern runtime for JavaScript and TypeScript."),
    RepositoryRef("alacritty", "alacritty", "Rust", "A cross-platform, OpenGL terminal emulator."),
    RepositoryRef(
        "tauri-apps", "tauri", "Rust",
        "Build smaller, faster, and more secure desktop applications with a web frontend.",
    ),
    RepositoryRef(
        "starship", "starship", "Rust",
        "The minimal, blazing-fast, infinitely customizable prompt for any shell.",
    ),
    RepositoryRef("yewstack", "yew", "Rust", "Rust / Wasm framework for building client web apps"),
    RepositoryRef(
        "tokio-rs", "tokio", "Rust",
        "A runtime for writing reliable asynchronous applications with Rust.",
    ),
    RepositoryRef("seanmonstar", "reqwest", "Rust", "An easy and powerful Rust HTTP Client"),
    RepositoryRef(
        "diesel-rs", "diesel", "Rust",
        "A safe, extensible ORM and Query Builder for Rust",
    ),
    RepositoryRef(
        "actix", "actix-web", "Rust",
        "Actix Web is a powerful, pragmatic, and extremely fast web framework for Rust.",
    ),
    RepositoryRef(
        "clap-rs", "clap", "Rust",
        "A full featured, fast Command Line Argument Parser for Rust",
    ),
    # C/C++
    RepositoryRef(
        "electron", "electron", "C++",
        "Build cross-platform desktop apps with JavaScript, HTML, and CSS",
    ),
    RepositoryRef("opencv", "opencv", "C++", "Open Source Computer Vision Library"),
    RepositoryRef(
        "protocolbuffers", "protobuf", "C++",
        "Protocol Buffers - Google's data interchange format",
    ),
    RepositoryRef("bitcoin", "bitcoin", "C++", "Bitcoin Core integration/staging tree"),
    RepositoryRef(
        "godotengine", "godot", "C++",
        "Godot Engine - Multi-platform 2D and 3D game engine",
    ),
    RepositoryRef(
        "llvm", "llvm-project", "C++",
        "Collection of modular and reusable compiler and toolchain technologies.",
    ),
    RepositoryRef(
        "microsoft", "terminal", "C++",
        "The new Windows Terminal and the original Windows console host, all in the same place!",
    ),
    RepositoryRef(
        "google", "leveldb", "C++",
        "Fast ordered key-value storage library written at Google.",
    ),
    RepositoryRef("nlohmann", "json", "C++", "JSON for Modern C++"),
    # C#/.NET
    RepositoryRef(
        "dotnet", "runtime", "C#",
        ".NET is a cross-platform runtime for cloud, mobile, desktop, and IoT apps.",
    ),
    RepositoryRef("PowerShell", "PowerShell", "C#", "PowerShell for every system!"),
    RepositoryRef(
        "dotnet", "efcore", "C#",
        "EF Core is a modern object-database mapper for .NET.",
    ),
    RepositoryRef("AvaloniaUI", "Avalonia", "C#", "A cross-platform UI framework for .NET"),
    RepositoryRef(
        "jstedfast", "MailKit", "C#",
        "A cross-platform .NET library for IMAP, POP3, and SMTP.",
    ),
    RepositoryRef(
        "dotnet", "maui", "C#",
        ".NET Multi-platform App UI for native mobile and desktop applications.",
    ),
    RepositoryRef("SignalR", "SignalR", "C#", "Incredibly simple real-time web for .NET"),
    RepositoryRef(
        "xunit", "xunit", "C#",
        "Free, open source, community-focused unit testing tool for .NET.",
    ),
    RepositoryRef("serilog", "serilog", "C#", "Simple .NET logging with fully-structured events"),
    RepositoryRef(
        "AutoMapper", "AutoMapper", "C#",
        "A convention-based object-object mapper in .NET.",
    ),
    # Ruby
    RepositoryRef(
        "jekyll", "jekyll", "Ruby",
        "Jekyll is a blog-aware static site generator in Ruby",
    ),
    RepositoryRef(
        "discourse", "discourse", "Ruby",
        "A platform for community discussion. Free, open, simple.",
    ),
    RepositoryRef(
        "fastlane", "fastlane", "Ruby",
        "The easiest way to automate building and releasing your iOS and Android apps",
    ),
    RepositoryRef("Homebrew", "brew", "Ruby", "The missing package manager for macOS (or Linux)"),
    RepositoryRef("rspec", "rspec-rails", "Ruby", "RSpec for Rails-5+"),
    # PHP
    RepositoryRef("symfony", "symfony", "PHP", "The Symfony PHP framework"),
    RepositoryRef("composer", "composer", "PHP", "Dependency Manager for PHP"),
    RepositoryRef("guzzle", "guzzle", "PHP", "Guzzle, an extensible PHP HTTP client"),
    RepositoryRef("phpunit", "phpunit", "PHP", "The PHP Unit Testing framework"),
    RepositoryRef(
        "yiisoft", "yii2", "PHP",
        "Yii 2: The Fast, Secure and Professional PHP Framework",
    ),
    # Swift
    RepositoryRef("apple", "swift", "Swift", "The Swift Programming Language"),
    RepositoryRef("Alamofire", "Alamofire", "Swift", "Elegant HTTP Networking in Swift"),
    RepositoryRef("Moya", "Moya", "Swift", "Network abstraction layer written in Swift"),
    RepositoryRef("ReactiveX", "RxSwift", "Swift", "Reactive Programming in Swift"),
    RepositoryRef(
        "SwiftyJSON", "SwiftyJSON", "Swift",
        "The better way to deal with JSON data in Swift",
    ),
    # Kotlin
    RepositoryRef("JetBrains", "kotlin", "Kotlin", "The Kotlin Programming Language"),
    RepositoryRef(
        "square", "okio", "Kotlin",
        "A modern I/O library for Android, Kotlin, and Java",
    ),
    RepositoryRef(
        "Kotlin", "kotlinx.coroutines", "Kotlin",
        "Library support for Kotlin coroutines",
    ),
    RepositoryRef(
        "InsertKoinIO", "koin", "Kotlin",
        "Koin - a pragmatic lightweight dependency injection framework for Kotlin",
    ),
    RepositoryRef(
        "ktorio", "ktor", "Kotlin",
        "Framework for quickly creating connected applications in Kotlin with minimal effort",
    ),
)


def find_repository(full_name: str) -> RepositoryRef | None:
    wanted = full_name.strip().lower()
    for repo in REPOSITORIES:
        if repo.full_name.lower() == wanted:
            return repo
    return None


def parse_repository(full_name: str) -> RepositoryRef:
    """Resolve ``owner/name`` against the catalog, or build an ad-hoc ref for it."""
    known = find_repository(full_name)
    if known is not None:
        return known
    owner, sep, name = full_name.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        raise ValueError(f"expected owner/name, got {full_name!r}")
    return RepositoryRef(owner, name, "Unknown", "")


def available_pool(
    catalog: Sequence[RepositoryRef], used: Iterable[str]
) -> list[RepositoryRef]:
    """Catalog minus repositories already used; the whole catalog once all are used."""
    used_names = set(used)
    remaining = [repo for repo in catalog if repo.full_name not in used_names]
    return remaining if remaining else list(catalog)


def choose_repository(
    pool: Sequence[RepositoryRef], rng: random.Random | None = None
) -> RepositoryRef:
    if not pool:
        raise ValueError("repository pool is empty")
    return (rng or random).choice(list(pool))
