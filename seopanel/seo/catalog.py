"""Predefined page catalog.

The catalog is the single source of truth for which pages exist. It is built
once at import time and handed to the reconciliation service; nothing mutates
it afterwards.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from seopanel.db.enums import PageCategory


@dataclass(frozen=True)
class PredefinedPage:
    """A manageable page and its default SEO metadata"""
    path: str
    default_slug: str
    category: PageCategory
    default_title: str
    default_description: str


class PageCatalog:
    """Immutable, path-indexed collection of predefined pages"""

    def __init__(self, pages: Iterable[PredefinedPage]):
        ordered: Tuple[PredefinedPage, ...] = tuple(pages)
        by_path: Dict[str, PredefinedPage] = {}
        seen_slugs = set()
        for page in ordered:
            if page.path in by_path:
                raise ValueError(f"Duplicate catalog path: {page.path}")
            if page.default_slug in seen_slugs:
                raise ValueError(f"Duplicate catalog slug: {page.default_slug}")
            by_path[page.path] = page
            seen_slugs.add(page.default_slug)
        self._pages = ordered
        self._by_path = by_path

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[PredefinedPage]:
        return iter(self._pages)

    def __contains__(self, path: object) -> bool:
        return path in self._by_path

    def get_by_path(self, path: str) -> Optional[PredefinedPage]:
        return self._by_path.get(path)

    def by_category(self, category: str) -> List[PredefinedPage]:
        return [page for page in self._pages if page.category.value == category]

    def paths(self) -> List[str]:
        return [page.path for page in self._pages]

    def slugs(self) -> List[str]:
        return [page.default_slug for page in self._pages]

    def invalid_paths(self, paths: Iterable[str]) -> List[str]:
        """Paths from `paths` that are not in the catalog, in input order"""
        return [path for path in paths if path not in self._by_path]


PREDEFINED_PAGES: Tuple[PredefinedPage, ...] = (
    PredefinedPage(
        path="/",
        default_slug="home",
        category=PageCategory.MAIN,
        default_title="Altiora Infotech - AI, Web3 & Growth Engineering Solutions",
        default_description=(
            "Leading AI, Web3, and growth engineering solutions for modern businesses. Transform your digital presence with cutting-edge technology."
        ),
    ),
    PredefinedPage(
        path="/about",
        default_slug="about-us",
        category=PageCategory.ABOUT,
        default_title="About Altiora Infotech - Innovation & Excellence",
        default_description=(
            "Learn about Altiora Infotech's mission to deliver innovative AI, Web3, and growth engineering solutions for businesses worldwide."
        ),
    ),
    PredefinedPage(
        path="/contact",
        default_slug="contact-us",
        category=PageCategory.CONTACT,
        default_title="Contact Altiora Infotech - Get In Touch",
        default_description=(
            "Contact Altiora Infotech for AI, Web3, and growth engineering solutions. Let's discuss your project requirements."
        ),
    ),
    PredefinedPage(
        path="/careers",
        default_slug="careers",
        category=PageCategory.OTHER,
        default_title="Careers at Altiora Infotech - Join Our Team",
        default_description=(
            "Join Altiora Infotech and work on cutting-edge AI, Web3, and growth engineering projects. Explore career opportunities."
        ),
    ),
    PredefinedPage(
        path="/portfolio",
        default_slug="portfolio",
        category=PageCategory.OTHER,
        default_title="Portfolio - Altiora Infotech Projects & Case Studies",
        default_description=(
            "Explore Altiora Infotech's portfolio of successful AI, Web3, and growth engineering projects and case studies."
        ),
    ),
    PredefinedPage(
        path="/services/ai-ml",
        default_slug="ai-ml-services",
        category=PageCategory.SERVICES,
        default_title="AI & ML Services - Machine Learning Solutions | Altiora Infotech",
        default_description=(
            "Comprehensive AI and machine learning services to transform your business with intelligent automation and data-driven insights."
        ),
    ),
    PredefinedPage(
        path="/services/ai-ml/machine-learning-development",
        default_slug="machine-learning-development",
        category=PageCategory.SERVICES,
        default_title="Machine Learning Development Services | Altiora Infotech",
        default_description=(
            "Custom machine learning development services for predictive analytics, automation, and intelligent business solutions."
        ),
    ),
    PredefinedPage(
        path="/services/ai-ml/natural-language-processing",
        default_slug="natural-language-processing",
        category=PageCategory.SERVICES,
        default_title="Natural Language Processing Services | NLP Solutions",
        default_description=(
            "Advanced NLP services for text analysis, chatbots, sentiment analysis, and language understanding applications."
        ),
    ),
    PredefinedPage(
        path="/services/ai-ml/computer-vision",
        default_slug="computer-vision-services",
        category=PageCategory.SERVICES,
        default_title="Computer Vision Services - Image & Video Analysis",
        default_description=(
            "Computer vision solutions for image recognition, object detection, and automated visual analysis applications."
        ),
    ),
    PredefinedPage(
        path="/services/ai-ml/deep-learning",
        default_slug="deep-learning-services",
        category=PageCategory.SERVICES,
        default_title="Deep Learning Services - Neural Network Solutions",
        default_description=(
            "Deep learning and neural network development for complex pattern recognition and AI-powered applications."
        ),
    ),
    PredefinedPage(
        path="/services/web3",
        default_slug="web3-services",
        category=PageCategory.SERVICES,
        default_title="Web3 Development Services - Blockchain & DeFi Solutions",
        default_description=(
            "Complete Web3 development services including blockchain, DeFi, NFTs, and decentralized application development."
        ),
    ),
    PredefinedPage(
        path="/services/web3/blockchain-development-services-building-the-future-of-web3-with-altiora-infotech",
        default_slug="blockchain-development-services-building-the-future-of-web3-with-altiora-infotech",
        category=PageCategory.SERVICES,
        default_title="Blockchain Development Services - Building the Future of Web3 | Altiora Infotech",
        default_description=(
            "Expert blockchain development services for Web3 applications, smart contracts, and decentralized solutions. Build the future with Altiora Infotech."
        ),
    ),
    PredefinedPage(
        path="/services/web3/smart-contract-development",
        default_slug="smart-contract-development",
        category=PageCategory.SERVICES,
        default_title="Smart Contract Development Services | Ethereum & Solidity",
        default_description=(
            "Professional smart contract development services for Ethereum, Binance Smart Chain, and other blockchain platforms."
        ),
    ),
    PredefinedPage(
        path="/services/web3/defi-development",
        default_slug="defi-development-services",
        category=PageCategory.SERVICES,
        default_title="DeFi Development Services - Decentralized Finance Solutions",
        default_description=(
            "DeFi development services for decentralized exchanges, lending platforms, yield farming, and financial protocols."
        ),
    ),
    PredefinedPage(
        path="/services/web3/nft-marketplace-development",
        default_slug="nft-marketplace-development",
        category=PageCategory.SERVICES,
        default_title="NFT Marketplace Development - Create Your NFT Platform",
        default_description=(
            "Custom NFT marketplace development services with advanced features for trading, minting, and managing digital assets."
        ),
    ),
    PredefinedPage(
        path="/services/web3/dapp-development",
        default_slug="dapp-development-services",
        category=PageCategory.SERVICES,
        default_title="DApp Development Services - Decentralized Applications",
        default_description=(
            "Decentralized application development services for Web3 platforms with user-friendly interfaces and robust functionality."
        ),
    ),
    PredefinedPage(
        path="/services/growth-engineering",
        default_slug="growth-engineering-services",
        category=PageCategory.SERVICES,
        default_title="Growth Engineering Services - Data-Driven Growth Solutions",
        default_description=(
            "Growth engineering services combining data analytics, automation, and optimization for sustainable business growth."
        ),
    ),
    PredefinedPage(
        path="/services/growth-engineering/conversion-optimization",
        default_slug="conversion-optimization-services",
        category=PageCategory.SERVICES,
        default_title="Conversion Rate Optimization Services | CRO Solutions",
        default_description=(
            "Conversion rate optimization services to maximize your website performance and increase customer conversions."
        ),
    ),
    PredefinedPage(
        path="/services/growth-engineering/analytics-implementation",
        default_slug="analytics-implementation-services",
        category=PageCategory.SERVICES,
        default_title="Analytics Implementation Services - Data Tracking Solutions",
        default_description=(
            "Professional analytics implementation services for comprehensive data tracking and business intelligence insights."
        ),
    ),
    PredefinedPage(
        path="/services/growth-engineering/marketing-automation",
        default_slug="marketing-automation-services",
        category=PageCategory.SERVICES,
        default_title="Marketing Automation Services - Streamline Your Marketing",
        default_description=(
            "Marketing automation services to streamline campaigns, nurture leads, and optimize customer engagement workflows."
        ),
    ),
    PredefinedPage(
        path="/services/growth-engineering/ab-testing",
        default_slug="ab-testing-services",
        category=PageCategory.SERVICES,
        default_title="A/B Testing Services - Optimize Your Conversions",
        default_description=(
            "Professional A/B testing services to optimize user experience, increase conversions, and drive data-driven decisions."
        ),
    ),
    PredefinedPage(
        path="/services/web-development",
        default_slug="web-development-services",
        category=PageCategory.SERVICES,
        default_title="Web Development Services - Custom Web Solutions",
        default_description=(
            "Professional web development services for custom websites, web applications, and digital solutions tailored to your business."
        ),
    ),
    PredefinedPage(
        path="/services/web-development/react-development",
        default_slug="react-development-services",
        category=PageCategory.SERVICES,
        default_title="React Development Services - Modern Web Applications",
        default_description=(
            "Expert React development services for building fast, scalable, and interactive web applications with modern UI/UX."
        ),
    ),
    PredefinedPage(
        path="/services/web-development/nextjs-development",
        default_slug="nextjs-development-services",
        category=PageCategory.SERVICES,
        default_title="Next.js Development Services - Full-Stack React Solutions",
        default_description=(
            "Next.js development services for server-side rendered applications, static sites, and full-stack React solutions."
        ),
    ),
    PredefinedPage(
        path="/services/web-development/nodejs-development",
        default_slug="nodejs-development-services",
        category=PageCategory.SERVICES,
        default_title="Node.js Development Services - Backend Solutions",
        default_description=(
            "Node.js development services for scalable backend applications, APIs, and server-side solutions."
        ),
    ),
    PredefinedPage(
        path="/services/web-development/ecommerce-development",
        default_slug="ecommerce-development-services",
        category=PageCategory.SERVICES,
        default_title="E-commerce Development Services - Online Store Solutions",
        default_description=(
            "Custom e-commerce development services for online stores, marketplaces, and digital commerce platforms."
        ),
    ),
    PredefinedPage(
        path="/services/mobile-development",
        default_slug="mobile-development-services",
        category=PageCategory.SERVICES,
        default_title="Mobile App Development Services - iOS & Android Apps",
        default_description=(
            "Professional mobile app development services for iOS and Android platforms with native and cross-platform solutions."
        ),
    ),
    PredefinedPage(
        path="/services/mobile-development/react-native-development",
        default_slug="react-native-development-services",
        category=PageCategory.SERVICES,
        default_title="React Native Development Services - Cross-Platform Apps",
        default_description=(
            "React Native development services for cross-platform mobile applications with native performance and user experience."
        ),
    ),
    PredefinedPage(
        path="/services/mobile-development/flutter-development",
        default_slug="flutter-development-services",
        category=PageCategory.SERVICES,
        default_title="Flutter Development Services - Cross-Platform Mobile Apps",
        default_description=(
            "Flutter development services for beautiful, fast, and cross-platform mobile applications with single codebase."
        ),
    ),
    PredefinedPage(
        path="/services/mobile-development/ios-development",
        default_slug="ios-development-services",
        category=PageCategory.SERVICES,
        default_title="iOS App Development Services - Native iPhone Apps",
        default_description=(
            "Native iOS app development services for iPhone and iPad applications with optimal performance and user experience."
        ),
    ),
    PredefinedPage(
        path="/services/mobile-development/android-development",
        default_slug="android-development-services",
        category=PageCategory.SERVICES,
        default_title="Android App Development Services - Native Android Apps",
        default_description=(
            "Native Android app development services for smartphones and tablets with Google Play Store optimization."
        ),
    ),
    PredefinedPage(
        path="/services/cloud-services",
        default_slug="cloud-services",
        category=PageCategory.SERVICES,
        default_title="Cloud Services - AWS, Azure & Google Cloud Solutions",
        default_description=(
            "Comprehensive cloud services including migration, deployment, and management on AWS, Azure, and Google Cloud platforms."
        ),
    ),
    PredefinedPage(
        path="/services/cloud-services/aws-development",
        default_slug="aws-development-services",
        category=PageCategory.SERVICES,
        default_title="AWS Development Services - Amazon Web Services Solutions",
        default_description=(
            "AWS development services for cloud infrastructure, serverless applications, and scalable cloud solutions on Amazon Web Services."
        ),
    ),
    PredefinedPage(
        path="/services/cloud-services/azure-development",
        default_slug="azure-development-services",
        category=PageCategory.SERVICES,
        default_title="Azure Development Services - Microsoft Cloud Solutions",
        default_description=(
            "Microsoft Azure development services for enterprise cloud applications, infrastructure, and digital transformation solutions."
        ),
    ),
    PredefinedPage(
        path="/services/cloud-services/google-cloud-development",
        default_slug="google-cloud-development-services",
        category=PageCategory.SERVICES,
        default_title="Google Cloud Development Services - GCP Solutions",
        default_description=(
            "Google Cloud Platform development services for scalable applications, data analytics, and machine learning solutions."
        ),
    ),
    PredefinedPage(
        path="/services/cloud-services/serverless-development",
        default_slug="serverless-development-services",
        category=PageCategory.SERVICES,
        default_title="Serverless Development Services - Function-as-a-Service",
        default_description=(
            "Serverless development services for cost-effective, scalable applications using AWS Lambda, Azure Functions, and Google Cloud Functions."
        ),
    ),
    PredefinedPage(
        path="/services/devops",
        default_slug="devops-services",
        category=PageCategory.SERVICES,
        default_title="DevOps Services - CI/CD & Infrastructure Automation",
        default_description=(
            "DevOps services for continuous integration, deployment automation, infrastructure management, and development workflow optimization."
        ),
    ),
    PredefinedPage(
        path="/services/devops/ci-cd-implementation",
        default_slug="ci-cd-implementation-services",
        category=PageCategory.SERVICES,
        default_title="CI/CD Implementation Services - Continuous Integration & Deployment",
        default_description=(
            "CI/CD implementation services for automated testing, deployment pipelines, and continuous integration workflows."
        ),
    ),
    PredefinedPage(
        path="/services/devops/docker-kubernetes",
        default_slug="docker-kubernetes-services",
        category=PageCategory.SERVICES,
        default_title="Docker & Kubernetes Services - Container Orchestration",
        default_description=(
            "Docker and Kubernetes services for containerization, orchestration, and scalable microservices architecture."
        ),
    ),
    PredefinedPage(
        path="/services/devops/infrastructure-as-code",
        default_slug="infrastructure-as-code-services",
        category=PageCategory.SERVICES,
        default_title="Infrastructure as Code Services - IaC Solutions",
        default_description=(
            "Infrastructure as Code services using Terraform, CloudFormation, and other IaC tools for automated infrastructure management."
        ),
    ),
    PredefinedPage(
        path="/services/data-services",
        default_slug="data-services",
        category=PageCategory.SERVICES,
        default_title="Data Services - Analytics, Engineering & Science Solutions",
        default_description=(
            "Comprehensive data services including data engineering, analytics, visualization, and data science solutions for business insights."
        ),
    ),
    PredefinedPage(
        path="/services/data-services/data-engineering",
        default_slug="data-engineering-services",
        category=PageCategory.SERVICES,
        default_title="Data Engineering Services - ETL & Data Pipeline Solutions",
        default_description=(
            "Data engineering services for ETL processes, data pipelines, data warehousing, and big data processing solutions."
        ),
    ),
    PredefinedPage(
        path="/services/data-services/data-analytics",
        default_slug="data-analytics-services",
        category=PageCategory.SERVICES,
        default_title="Data Analytics Services - Business Intelligence Solutions",
        default_description=(
            "Data analytics services for business intelligence, reporting, dashboard creation, and data-driven decision making."
        ),
    ),
    PredefinedPage(
        path="/services/data-services/data-visualization",
        default_slug="data-visualization-services",
        category=PageCategory.SERVICES,
        default_title="Data Visualization Services - Interactive Dashboards",
        default_description=(
            "Data visualization services for interactive dashboards, charts, and visual analytics using modern visualization tools."
        ),
    ),
    PredefinedPage(
        path="/services/ui-ux-design",
        default_slug="ui-ux-design-services",
        category=PageCategory.SERVICES,
        default_title="UI/UX Design Services - User Experience & Interface Design",
        default_description=(
            "Professional UI/UX design services for web and mobile applications with focus on user experience and modern design principles."
        ),
    ),
    PredefinedPage(
        path="/services/ui-ux-design/web-design",
        default_slug="web-design-services",
        category=PageCategory.SERVICES,
        default_title="Web Design Services - Modern Website Design",
        default_description=(
            "Creative web design services for modern, responsive, and user-friendly websites that engage and convert visitors."
        ),
    ),
    PredefinedPage(
        path="/services/ui-ux-design/mobile-app-design",
        default_slug="mobile-app-design-services",
        category=PageCategory.SERVICES,
        default_title="Mobile App Design Services - iOS & Android UI/UX",
        default_description=(
            "Mobile app design services for iOS and Android applications with intuitive user interfaces and exceptional user experience."
        ),
    ),
    PredefinedPage(
        path="/services/ui-ux-design/user-research",
        default_slug="user-research-services",
        category=PageCategory.SERVICES,
        default_title="User Research Services - UX Research & Testing",
        default_description=(
            "User research services including usability testing, user interviews, and UX research for data-driven design decisions."
        ),
    ),
    PredefinedPage(
        path="/blog",
        default_slug="blog",
        category=PageCategory.BLOG,
        default_title="Blog - Latest Insights on AI, Web3 & Technology | Altiora Infotech",
        default_description=(
            "Stay updated with the latest insights, trends, and tutorials on AI, Web3, blockchain, and modern technology from Altiora Infotech experts."
        ),
    ),
    PredefinedPage(
        path="/blog/ai-trends-2024",
        default_slug="ai-trends-2024",
        category=PageCategory.BLOG,
        default_title="AI Trends 2024 - Future of Artificial Intelligence",
        default_description=(
            "Explore the top AI trends for 2024 and discover how artificial intelligence is shaping the future of business and technology."
        ),
    ),
    PredefinedPage(
        path="/blog/web3-development-guide",
        default_slug="web3-development-guide",
        category=PageCategory.BLOG,
        default_title="Web3 Development Guide - Complete Beginner's Tutorial",
        default_description=(
            "Complete guide to Web3 development covering blockchain, smart contracts, DeFi, and decentralized application development."
        ),
    ),
    PredefinedPage(
        path="/blog/blockchain-business-benefits",
        default_slug="blockchain-business-benefits",
        category=PageCategory.BLOG,
        default_title="Blockchain Business Benefits - Transform Your Enterprise",
        default_description=(
            "Discover how blockchain technology can transform your business with improved security, transparency, and operational efficiency."
        ),
    ),
    PredefinedPage(
        path="/privacy-policy",
        default_slug="privacy-policy",
        category=PageCategory.OTHER,
        default_title="Privacy Policy - Altiora Infotech",
        default_description=(
            "Privacy policy for Altiora Infotech outlining how we collect, use, and protect your personal information and data."
        ),
    ),
    PredefinedPage(
        path="/terms-of-service",
        default_slug="terms-of-service",
        category=PageCategory.OTHER,
        default_title="Terms of Service - Altiora Infotech",
        default_description=(
            "Terms of service for Altiora Infotech services including usage guidelines, limitations, and legal agreements."
        ),
    ),
    PredefinedPage(
        path="/sitemap",
        default_slug="sitemap",
        category=PageCategory.OTHER,
        default_title="Sitemap - Altiora Infotech Website Navigation",
        default_description=(
            "Complete sitemap of Altiora Infotech website with links to all pages, services, and resources for easy navigation."
        ),
    ),
)


_DEFAULT_CATALOG = PageCatalog(PREDEFINED_PAGES)


def default_catalog() -> PageCatalog:
    """The catalog of the site's pages, shared across requests"""
    return _DEFAULT_CATALOG
