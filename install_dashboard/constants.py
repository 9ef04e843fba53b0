# install_dashboard/constants.py

# Configured roster. Install records are matched against these by name.
TECHS = ("Austin", "Adam", "Tim", "Kaleb", "Hunter", "Miguel")
INSTALLERS = ("Mike", "Steven", "Bubba", "Josh")

GROUP_BY_TECH = "tech"
GROUP_BY_INSTALLER = "installer"
GROUP_MODES = (GROUP_BY_TECH, GROUP_BY_INSTALLER)

# NOTE: the rate follows the grouping dimension, not the person's role.
# Grouping the same installs by installer pays 7.5% instead of 5%.
COMMISSION_RATES = {
    GROUP_BY_TECH: 0.05,
    GROUP_BY_INSTALLER: 0.075,
}

TECHNICIANS_PAGE_SIZE = 200
