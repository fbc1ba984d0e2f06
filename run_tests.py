#!/usr/bin/env python3
"""Test runner script for the dotstrap test suite"""

import os
import sys
import subprocess
import argparse
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent
TESTS_DIR = PROJECT_ROOT / 'tests'


def main():
    """Main test runner function"""
    parser = argparse.ArgumentParser(description='dotstrap Test Runner')

    # Test selection options
    parser.add_argument('--unit', action='store_true',
                       help='Run only unit tests')
    parser.add_argument('--integration', action='store_true',
                       help='Run only integration tests')
    parser.add_argument('--slow', action='store_true',
                       help='Include slow tests')
    parser.add_argument('--coverage', action='store_true',
                       help='Generate coverage report')
    parser.add_argument('--html-coverage', action='store_true',
                       help='Generate HTML coverage report')

    # Output options
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Verbose output')
    parser.add_argument('--quiet', '-q', action='store_true',
                       help='Quiet output')
    parser.add_argument('--junit-xml', metavar='FILE',
                       help='Generate JUnit XML report')
    parser.add_argument('--timeout', type=int, default=300, metavar='SECONDS',
                       help='Global test timeout (default: 300s)')

    # Development options
    parser.add_argument('--pdb', action='store_true',
                       help='Drop into debugger on failures')
    parser.add_argument('--lf', '--last-failed', action='store_true',
                       help='Run only tests that failed last time')

    # Path options
    parser.add_argument('paths', nargs='*',
                       help='Specific test paths to run')

    args = parser.parse_args()

    cmd = [sys.executable, '-m', 'pytest']

    markers = []
    if args.unit:
        markers.append('unit')
    elif args.integration:
        markers.append('integration')
    if not args.slow:
        markers.append('not slow')
    cmd.extend(['-m', ' and '.join(markers)])

    if args.coverage or args.html_coverage:
        cmd.extend(['--cov=dotstrap', '--cov-report=term'])
        if args.html_coverage:
            cmd.append('--cov-report=html:tests/coverage_html')
        if args.coverage:
            cmd.append('--cov-report=xml:tests/coverage.xml')

    if args.verbose:
        cmd.append('-v')
    elif args.quiet:
        cmd.append('-q')

    if args.junit_xml:
        cmd.extend(['--junit-xml', args.junit_xml])

    cmd.extend(['--timeout', str(args.timeout)])

    if args.pdb:
        cmd.append('--pdb')
    if args.lf:
        cmd.append('--lf')

    cmd.extend(args.paths or [str(TESTS_DIR)])

    # Keep the developer's real dotfiles and .env out of the run
    env = os.environ.copy()
    env['PYTHONPATH'] = str(PROJECT_ROOT)
    env['DOTSTRAP_ENV_FILE'] = os.devnull
    env['DOTSTRAP_LOGGING_FILE_ENABLED'] = 'false'

    print("Running dotstrap Test Suite")
    print(f"Project Root: {PROJECT_ROOT}")
    print(f"Command: {' '.join(cmd)}")
    print("-" * 60)

    try:
        result = subprocess.run(cmd, env=env, cwd=str(PROJECT_ROOT))
    except KeyboardInterrupt:
        print("\n🛑 Test run interrupted by user")
        return 130

    print("-" * 60)
    if result.returncode == 0:
        print("✅ All tests passed!")
    else:
        print(f"❌ Some tests failed! Exit code: {result.returncode}")

    if args.html_coverage:
        print(f"📊 HTML coverage report: {PROJECT_ROOT / 'tests' / 'coverage_html' / 'index.html'}")

    return result.returncode


def check_dependencies():
    """Check if required test dependencies are available"""
    required_modules = {
        'pytest': 'pytest',
        'pytest_cov': 'pytest-cov',
        'pytest_timeout': 'pytest-timeout',
    }
    missing = []

    for module, package in required_modules.items():
        try:
            __import__(module)
        except ImportError:
            missing.append(package)

    if missing:
        print("❌ Missing required test dependencies:")
        for package in missing:
            print(f"   - {package}")
        print("\nInstall with: pip install -e '.[test]'")
        return False

    return True


if __name__ == '__main__':
    if not check_dependencies():
        sys.exit(1)

    sys.exit(main())
