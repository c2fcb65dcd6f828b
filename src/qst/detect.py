# src/qst/detect.py: Guess the project type from the files present.
# The rule table below is evaluated in order and the first matching entry
# wins, so more specific rules (a build tool's marker file) must come before
# generic ones (a bare source file extension).

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pathspec

from .util.errors import NoMatchError
from .util.paths import is_executable

Matcher = Callable[[Path], bool]

@dataclass(frozen=True)
class ProjectType:
    id: str
    commands: Dict[str, str]
    matches: Matcher


# --- Predicates ---

def pattern(*patterns: str) -> Matcher:
    """A file whose name matches, or a directory with a matching entry."""
    spec = pathspec.PathSpec.from_lines("gitwildmatch", patterns)

    def matcher(path: Path) -> bool:
        if path.is_file():
            return spec.match_file(path.name)
        if path.is_dir():
            return any(spec.match_file(entry.name) for entry in path.iterdir())
        return False
    return matcher

def has_file(name: str) -> Matcher:
    """The path is a directory containing the regular file ``name``."""
    return lambda path: (path / name).is_file()

def has_dir(name: str) -> Matcher:
    return lambda path: (path / name).is_dir()

def any_of(*matchers: Matcher) -> Matcher:
    return lambda path: any(m(path) for m in matchers)

def executable(path: Path) -> bool:
    return is_executable(path)


# --- Rule table ---

PROJECT_TYPES: List[ProjectType] = [
    ProjectType("c", {"run": "gcc -o $(basename {file} .c) {file} && ./$(basename {file} .c)"},
                pattern("*.c")),
    ProjectType("clojure/leiningen", {"build": "lein uberjar", "run": "lein run", "test": "lein test"},
                has_file("project.clj")),
    ProjectType("coffeescript", {"run": "coffee {file}"}, pattern("*.coffee")),
    ProjectType("docker/fig", {"build": "fig build", "run": "fig up"}, has_file("fig.yml")),
    ProjectType("docker", {"build": "docker build ."}, has_file("Dockerfile")),
    ProjectType("executable", {"run": "{file}"}, executable),
    ProjectType("go", {"build": "go build {file}",
                       "run": "go build $(basename {file}) && ./$(basename {file} .go)",
                       "test": "go test"},
                pattern("*.go")),
    ProjectType("haskell/cabal", {"build": "cabal sandbox init && cabal install --only-dependencies && cabal build",
                                  "run": "cabal sandbox init && cabal run",
                                  "test": "cabal sandbox init && cabal test"},
                pattern("*.cabal")),
    ProjectType("haskell", {"run": "runhaskell {file}"}, pattern("*.hs", "*.lhs")),
    ProjectType("idris", {"run": "idris -o $(basename {file} .idr) {file} && ./$(basename {file} .idr)"},
                pattern("*.idr")),
    ProjectType("java/maven", {"build": "mvn compile", "test": "mvn compile test"}, has_file("pom.xml")),
    ProjectType("javascript/npm", {"build": "npm install", "run": "npm start", "test": "npm test"},
                has_file("package.json")),
    ProjectType("javascript/meteor", {"run": "meteor"}, has_file(".meteor/.id")),
    ProjectType("javascript", {"run": "node {file}"}, pattern("*.js")),
    ProjectType("jekyll", {"build": "jekyll build", "run": "jekyll serve --watch"},
                any_of(has_file("_config.yml"), has_dir("_posts"))),
    ProjectType("julia", {"run": "julia {file}"}, pattern("*.jl")),
    ProjectType("latex", {"run": "pdflatex {file}"}, pattern("*.latex", "*.tex")),
    ProjectType("python/django", {"build": "python manage.py syncdb", "run": "python manage.py runserver",
                                  "test": "python manage.py test"},
                has_file("manage.py")),
    ProjectType("python", {"run": "python {file}"}, pattern("*.py")),
    ProjectType("ruby/rails", {"build": "bundle exec rake db:migrate", "run": "rails server",
                               "test": "bundle exec rake test"},
                has_file("bin/rails")),
    ProjectType("ruby/rake", {"run": "rake", "test": "rake test"}, has_file("Rakefile")),
    ProjectType("ruby", {"run": "ruby {file}"}, pattern("*.rb")),
    ProjectType("rust/cargo", {"build": "cargo build", "run": "cargo run", "test": "cargo test"},
                has_file("Cargo.toml")),
    ProjectType("rust", {"run": "rustc {file} && ./$(basename {file} .rs)"}, pattern("*.rs")),
    ProjectType("cmake", {"build": "mkdir .build && cd .build && cmake .. && make"},
                has_file("CMakeLists.txt")),
    ProjectType("make", {"run": "make", "test": "make test"}, has_file("Makefile")),
    ProjectType("procfile", {"run": "$(sed -n 's/^web: //p' Procfile)"}, has_file("Procfile")),
]


# --- Lookup ---

def detect(path: Path) -> ProjectType:
    """Returns the first project type matching ``path``."""
    for project in PROJECT_TYPES:
        if project.matches(path):
            return project
    raise NoMatchError(f"No project type matches '{path}'.")

def detect_all(path: Path) -> List[ProjectType]:
    return [project for project in PROJECT_TYPES if project.matches(path)]

def get_by_id(project_id: str) -> Optional[ProjectType]:
    return next((p for p in PROJECT_TYPES if p.id == project_id), None)
