"""Map package, image, OS and runtime names onto endoflife.date product slugs."""

import re
from typing import Dict, Optional, Tuple

PRODUCT_MAP: Dict[str, str] = {
    # npm: frameworks and libraries
    "react": "react",
    "vue": "vue",
    "@angular/core": "angular",
    "@nestjs/core": "nestjs",
    "next": "nextjs",
    "nuxt": "nuxt",
    "ember-source": "ember",
    "svelte": "svelte",
    "jquery": "jquery",
    "bootstrap": "bootstrap",
    "tailwindcss": "tailwindcss",
    "electron": "electron",
    "native-base": "native-base",
    "react-native": "react-native",
    "expo": "expo",
    "expo-cli": "expo",
    "express": "express",
    # npm: runtimes and package managers
    "node": "nodejs",
    "nodejs": "nodejs",
    "npm": "npm",
    "yarn": "yarn",
    "pnpm": "pnpm",
    "bun": "bun",
    # npm: test frameworks
    "jest": "jest",
    "mocha": "mocha",
    "cypress": "cypress",
    "playwright": "playwright",
    "@playwright/test": "playwright",
    "jasmine": "jasmine",
    "jasmine-core": "jasmine",
    "karma": "karma",
    "protractor": "protractor",
    "ava": "ava",
    "vitest": "vitest",
    # npm: build tooling
    "webpack": "webpack",
    "vite": "vite",
    "rollup": "rollup",
    "parcel": "parcel",
    "parcel-bundler": "parcel",
    "esbuild": "esbuild",
    "@turbo/gen": "turborepo",
    "turbo": "turborepo",
    "eslint": "eslint",
    "prettier": "prettier",
    "typescript": "typescript",
    # Databases and their client drivers
    "postgresql": "postgresql",
    "postgres": "postgresql",
    "pg": "postgresql",
    "mysql": "mysql",
    "mysql2": "mysql",
    "mongodb": "mongodb",
    "mongoose": "mongodb",
    "redis": "redis",
    "ioredis": "redis",
    "mariadb": "mariadb",
    "elasticsearch": "elasticsearch",
    "@elastic/elasticsearch": "elasticsearch",
    "memcached": "memcached",
    "cassandra-driver": "cassandra",
    "neo4j-driver": "neo4j",
    "sqlite3": "sqlite",
    "better-sqlite3": "sqlite",
    "couchdb": "couchdb",
    "nano": "couchdb",
    # Composer
    "laravel/framework": "laravel",
    "symfony/symfony": "symfony",
    "drupal/core": "drupal",
    "magento/product-community-edition": "magento",
    "typo3/cms-core": "typo3",
    "php": "php",
    "composer": "composer",
    # Python
    "django": "django",
    "flask": "flask",
    "python": "python",
    "ansible": "ansible",
    "kubernetes": "kubernetes",
    "pytest": "pytest",
    # Go
    "go": "go",
    "github.com/gofiber/fiber": "fiber",
    "github.com/gin-gonic/gin": "gin",
    # Ruby
    "ruby": "ruby",
    "rails": "rails",
    "jekyll": "jekyll",
    "bundler": "bundler",
    # JVM and other build tools
    "gradle": "gradle",
    "maven": "maven",
    "ant": "ant",
    "bazel": "bazel",
    "grunt": "grunt",
    # Containers
    "docker": "docker-engine",
    "containerd": "containerd",
    "podman": "podman",
    # Cloud SDKs
    "aws-sdk": "amazon-eks",
    "@aws-sdk/client-s3": "amazon-eks",
    "@azure/storage-blob": "azuredevops",
    "@google-cloud/storage": "google-kubernetes-engine",
}

# Official image name (last path segment) -> product slug
DOCKER_IMAGE_MAP: Dict[str, str] = {
    "node": "nodejs",
    "python": "python",
    "ruby": "ruby",
    "php": "php",
    "golang": "go",
    "openjdk": "openjdk-builds-from-oracle",
    "eclipse-temurin": "eclipse-temurin",
    "amazoncorretto": "amazon-corretto",
    "sdk": "dotnet",
    "aspnet": "dotnet",
    "runtime": "dotnet",
    "ubuntu": "ubuntu",
    "debian": "debian",
    "alpine": "alpine",
    "centos": "centos",
    "fedora": "fedora",
    "amazonlinux": "amazon-linux",
    "rockylinux": "rocky-linux",
    "almalinux": "almalinux",
    "postgres": "postgresql",
    "mysql": "mysql",
    "mariadb": "mariadb",
    "mongo": "mongodb",
    "redis": "redis",
    "nginx": "nginx",
    "httpd": "apache",
    "tomcat": "tomcat",
    "elasticsearch": "elasticsearch",
    "rabbitmq": "rabbitmq",
    "memcached": "memcached",
    "traefik": "traefik",
    "haproxy": "haproxy",
    "kong": "kong-gateway",
    "docker": "docker-engine",
}

# Substring of an os-release pretty name -> product slug; first hit wins
OS_PRODUCTS: Tuple[Tuple[str, str], ...] = (
    ("ubuntu", "ubuntu"),
    ("alpine", "alpine"),
    ("debian", "debian"),
    ("fedora", "fedora"),
    ("centos", "centos"),
    ("rocky", "rocky-linux"),
    ("almalinux", "almalinux"),
    ("amazon linux", "amazon-linux"),
    ("red hat", "rhel"),
)

# AWS Lambda runtime family -> product slug
RUNTIME_PRODUCTS: Dict[str, str] = {
    "nodejs": "nodejs",
    "python": "python",
    "java": "amazon-corretto",
    "dotnet": "dotnet",
    "ruby": "ruby",
    "go": "go",
}

_OS_VERSION = re.compile(r"(\d+(\.\d+)?)")


def map_package_to_product(package_name: str) -> Optional[str]:
    """Return the product slug for a package name, or None if it is not tracked."""
    return PRODUCT_MAP.get(package_name)


def map_docker_image(image: str) -> Optional[str]:
    """
    Return the product slug for a container image reference.

    Registry hosts, ``library/`` prefixes and tags are ignored; the last path
    segment is looked up, so ``mcr.microsoft.com/dotnet/sdk:8.0`` maps to
    ``dotnet``.
    """
    name = image.split("@", 1)[0]
    last = name.rsplit("/", 1)[-1]
    last = last.split(":", 1)[0].lower()
    return DOCKER_IMAGE_MAP.get(last)


def map_os_name(pretty_name: str) -> Optional[Tuple[str, str]]:
    """
    Map an OS pretty name to ``(product, version)``.

    ``"Ubuntu 22.04.5 LTS"`` becomes ``("ubuntu", "22.04")``. Returns None
    when the distribution is not tracked or no version number is present.
    """
    lower = pretty_name.lower()
    product = next((slug for needle, slug in OS_PRODUCTS if needle in lower), None)
    if product is None:
        return None
    match = _OS_VERSION.search(pretty_name)
    if not match:
        return None
    return product, match.group(0)


def map_runtime_family(family: str) -> Optional[str]:
    """Return the product slug for an AWS Lambda runtime family."""
    return RUNTIME_PRODUCTS.get(family.lower())
