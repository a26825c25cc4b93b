import setuptools

with open("README.md") as f:
	long_description = f.read()

setuptools.setup(
	name = "resticwrap",
	packages = setuptools.find_packages(include = [ "resticwrap", "resticwrap.*" ]),
	version = "0.1.0",
	license = "gpl-3.0",
	description = "Simplified command line frontend for restic: configure, run and schedule backups",
	long_description = long_description,
	long_description_content_type = "text/markdown",
	author = "Johannes Bauer",
	author_email = "joe@johannes-bauer.com",
	keywords = [ "restic", "backup", "cron" ],
	python_requires = ">=3.10",
	install_requires = [
		"requests"
	],
	extras_require = {
		"test": [
			"pytest",
		],
	},
	entry_points = {
		"console_scripts": [
			"resticwrap = resticwrap.__main__:main"
		]
	},
	include_package_data = False,
	classifiers = [
		"Development Status :: 4 - Beta",
		"Intended Audience :: System Administrators",
		"License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
		"Programming Language :: Python :: 3",
		"Programming Language :: Python :: 3 :: Only",
		"Programming Language :: Python :: 3.10",
	],
)
