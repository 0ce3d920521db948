from rich.pretty import pprint

from argsmith import *


def main():
    parser = Parser(shell=True)

    test = parser.check().flag("t").key("test").description("This is a test").parse()
    beep = parser.check().flag("b").key("beep").description("beep borp").parse()
    dhoom = parser.value(Int32).flag("d").key("dhoom").description("Dhoom level").default_value(4).options({1, 2, 3, 4, 55}).parse()
    items = parser.list(int).key("my-list").description("Numbers to chew on").default_list([1, 2, 3, 4, 5]).parse()

    parser.finalize()
    pprint([test, beep, dhoom, items])


if __name__ == '__main__':
    main()
