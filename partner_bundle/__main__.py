from partner_bundle.cli import prepare

prepare()
